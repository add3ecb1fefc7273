"""
Tunables shared across the bot.
"""

# Repository used when neither the command, the server settings nor DEFAULT_REPO name one
FALLBACK_REPO = "SX-9/project-helper"

# MongoDB
MONGODB_SERVER_SELECTION_TIMEOUT_MS = 5000
MONGODB_DATABASE = "project-helper"
SERVER_CONFIG_COLLECTION = "server_config"

# GitHub
GITHUB_API_URL = "https://api.github.com"
GITHUB_API_TIMEOUT_SECONDS = 10
USER_REPOS_PAGE_SIZE = 9

# Rendering
MAX_DESCRIPTION_LENGTH = 4096
DEFAULT_COLOR = 0x24292E
OPEN_COLOR = 0x238636
CLOSED_COLOR = 0x8957E5

IMAGE_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "gif", "webp", "bmp", "svg", "ico"})

DIRECTORY_ICONS = {
    "dir": ":file_folder:",
    "file": ":page_facing_up:",
    "submodule": ":package:",
    "symlink": ":link:",
}

# Suggested values for the /file command path
FILE_PATH_SUGGESTIONS = {
    "Readme File": "README.md",
    "Code License": "LICENSE",
    "Root Directory": ".",
}
