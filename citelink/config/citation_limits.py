"""
Citation processing limits and constants.

Centralized configuration for suggestion caps, relevance scores,
breadcrumb sizes, and the serialized citation node tag.
"""

# Autocomplete limits
MAX_SUGGESTIONS = 8
"""Maximum suggestions returned per keystroke (keeps input latency flat)"""

# Relevance scores for suggestion ranking
SCORE_EXACT_MATCH = 100
SCORE_PREFIX_MATCH = 90
SCORE_CONTAINS_MATCH = 70
SCORE_TITLE_MATCH = 50

# History
RECENT_HISTORY_LIMIT = 5
"""Number of history entries shown in breadcrumbs"""

# Navigation
MEDIA_TIMESTAMP_LIMIT_SECONDS = 3600
"""Page numbers below this are read as mm:ss offsets for audio/video files"""

# Serialized node shape
CITATION_NODE_TYPE = "citation"
CITATION_NODE_VERSION = 1
