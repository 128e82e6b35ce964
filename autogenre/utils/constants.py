"""Named constants for AutoGenre. No magic numbers."""

# --- Application ---
APP_NAME = "AutoGenre"
APP_VERSION = "0.1.0"

# --- Logging ---
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
# Libraries that log chatty INFO lines; never louder than WARNING
QUIET_LIBRARY_LOGGERS = ("musicbrainzngs", "urllib3")

# --- Supported Audio Extensions (lowercase, no dot) ---
# aiff is scannable but has no tag codec; see tag_codec.get_codec().
SUPPORTED_EXTENSIONS = frozenset({
    "mp3",
    "flac",
    "wav",
    "m4a",
    "aiff",
    "ogg",
})

# --- Placeholders ---
UNKNOWN_FOLDER_VALUE = "Unknown"
UNKNOWN_ARTIST = "Unknown Artist"
UNKNOWN_TITLE = "Unknown Title"
PATTERN_PLACEHOLDERS = ("{genre}", "{artist}", "{album}", "{title}", "{year}")

# --- Backups ---
BACKUP_DIR_NAME = ".autogenre_backups"
BACKUP_SUFFIX = ".json"
BACKUP_JSON_INDENT = 2

# --- Year Ranges per tag dialect ---
# ID3v2 timestamps carry a four-digit year; Vorbis comments and MP4 atoms
# are stored as unsigned 32-bit values.
ID3_MAX_YEAR = 9999
UINT32_MAX = 2**32 - 1

# --- ID3 ---
ID3_ENCODING_UTF8 = 3
ID3_WRITE_VERSION = 4

# --- Settings Defaults ---
DEFAULT_FOLDER_PATTERN = "{genre}"
DEFAULT_BACKUP_BEFORE_CHANGES = True
DEFAULT_ORGANIZE_FILES = False
DEFAULT_RENAME_FILES = False
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_PROVIDER_TIMEOUT_SECONDS = 10.0

# --- Paths ---
DEFAULT_CONFIG_DIRNAME = "autogenre"
DEFAULT_CONFIG_FILENAME = "settings.yaml"
CONFIG_PATH_ENV_VAR = "AUTOGENRE_CONFIG"

# --- Spotify ---
SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"
SPOTIFY_SEARCH_URL = "https://api.spotify.com/v1/search"
SPOTIFY_ARTIST_URL = "https://api.spotify.com/v1/artists/{artist_id}"
# Spotify tokens live for an hour; refresh well before that.
SPOTIFY_TOKEN_LIFETIME_SECONDS = 3000

# --- Beatport ---
BEATPORT_TOKEN_URL = "https://api.beatport.com/v4/auth/o/token/"
BEATPORT_SEARCH_URL = "https://api.beatport.com/v4/catalog/tracks/"
BEATPORT_CLIENT_ID = "oeGScrHHsv1K1vO2Mby3sHQ7oZNWpViH"
BEATPORT_DEFAULT_EXPIRES_IN = 3600
BEATPORT_EXPIRY_MARGIN_SECONDS = 300

# --- MusicBrainz ---
MUSICBRAINZ_APP_NAME = "AutoGenrePro"
MUSICBRAINZ_APP_VERSION = APP_VERSION
MUSICBRAINZ_CONTACT = "contact@example.com"

# --- Provider Aggregation ---
DEFAULT_MAX_PROVIDER_WORKERS = 3
