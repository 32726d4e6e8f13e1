API_PREFIX = "/api"
DOCUMENTS = f"{API_PREFIX}/documents"
VARIANTS = f"{DOCUMENTS}/variants"
AUTO_LINK_SETTINGS = f"{API_PREFIX}/users/me/auto-link-settings"
