"""
System constants that should never change.

Registry seed data lives here too; config.yaml can only extend it.
"""

# Process exit codes
EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130  # Standard exit code for SIGINT

# Container override flags accepted on the command line
OVERRIDE_FLAGS = {"--mp4": "mp4", "--mkv": "mkv"}

# Decision sentinels
PASSTHROUGH_CODEC = "copy"
PASSTHROUGH_CONTAINER = "ok"

# Seed capability tables
SUPPORTED_CONTAINERS = ("MPEG-4", "Matroska")
UNSUPPORTED_CONTAINERS = ("BDAV", "AVI", "Flash Video")

SUPPORTED_VIDEO_CODECS = ("AVC",)
UNSUPPORTED_VIDEO_CODECS = ("MPEG-4 Visual", "xvid", "MPEG Video", "HEVC")

SUPPORTED_AUDIO_CODECS = ("AAC", "MPEG Audio", "Vorbis", "Ogg", "Opus")
UNSUPPORTED_AUDIO_CODECS = ("AC-3", "DTS", "PCM")

DEFAULT_VIDEO_CODEC = "h264"
DEFAULT_AUDIO_CODEC = "libvorbis"
DEFAULT_CONTAINER = "mkv"

VIDEO_EXTENSIONS = ("mkv", "avi", "mp4", "3gp", "mov", "mpg", "mpeg", "qt", "wmv", "m2ts", "flv")

# Tool limits
PROBE_TIMEOUT_SECONDS = 30
MIN_CONVERT_TIMEOUT_SECONDS = 600
CONVERT_REALTIME_FACTOR = 5
