"""
Constantes globales pour MediaShelf.

Ce module contient les constantes utilisees dans l'application:
- Tables d'extensions par type de fichier
- Repertoires ignores lors du parcours
- Marqueurs techniques retires des noms de fichiers
- Composants de chemin designant un dossier de fichiers finalises
"""

# Extensions reconnues par type (sans le point, en minuscules)
VIDEO_EXTENSIONS = frozenset({
    "mkv",
    "mp4",
    "avi",
    "mov",
    "wmv",
    "flv",
    "webm",
    "m4v",
    "mpg",
    "mpeg",
    "ts",
    "m2ts",
    "vob",
    "rmvb",
})

AUDIO_EXTENSIONS = frozenset({
    "mp3",
    "flac",
    "wav",
    "m4a",
    "aac",
    "ogg",
    "opus",
    "wma",
})

IMAGE_EXTENSIONS = frozenset({
    "jpg",
    "jpeg",
    "png",
    "webp",
    "bmp",
    "gif",
    "tif",
    "tiff",
    "svg",
})

DOCUMENT_EXTENSIONS = frozenset({
    "pdf",
    "doc",
    "docx",
    "txt",
    "nfo",
    "md",
    "srt",
    "ass",
    "epub",
    "mobi",
    "azw3",
})

# Repertoires systeme jamais parcourus (les repertoires caches sont aussi ignores)
IGNORED_DIR_NAMES = frozenset({
    "System Volume Information",
    "$RECYCLE.BIN",
    "node_modules",
    ".git",
})

# Composants de chemin designant un dossier de fichiers finalises
FINISHED_PATH_MARKERS = frozenset({
    "finished",
    "成片",
})

# Canal loguru des messages de parcours (journal de scan dedie)
SCAN_CHANNEL = "scan"
