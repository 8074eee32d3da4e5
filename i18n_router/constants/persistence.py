"""Names under which a visitor's locale choice is remembered."""

# Cookie read back by the redirect middleware on the next request
COOKIE_NAME = "vitepress-locale"
COOKIE_MAX_AGE = 31536000  # 1 year
COOKIE_PATH = "/"

# Local storage key written by the client tracker
STORAGE_KEY = "vitepress-preferred-lang"
