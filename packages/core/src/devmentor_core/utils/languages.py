SUPPORTED_LANGUAGES = (
    "javascript",
    "typescript",
    "python",
    "java",
    "cpp",
    "c",
    "csharp",
    "go",
    "rust",
    "php",
    "ruby",
    "kotlin",
    "swift",
)

EXTENSION_LANGUAGES = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".py": "python",
    ".pyi": "python",
    ".java": "java",
    ".cpp": "cpp",
    ".cc": "cpp",
    ".cxx": "cpp",
    ".hpp": "cpp",
    ".c": "c",
    ".h": "c",
    ".cs": "csharp",
    ".go": "go",
    ".rs": "rust",
    ".php": "php",
    ".rb": "ruby",
    ".kt": "kotlin",
    ".kts": "kotlin",
    ".swift": "swift",
}


def is_supported_language(language: str) -> bool:
    return language.lower() in SUPPORTED_LANGUAGES


def detect_language(file_name: str) -> str | None:
    """Guess the review language from a file name, or None if unknown."""
    lowered = file_name.lower()
    for ext in sorted(EXTENSION_LANGUAGES, key=len, reverse=True):
        if lowered.endswith(ext):
            return EXTENSION_LANGUAGES[ext]
    return None
