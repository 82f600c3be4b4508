"""Static configuration tables for codexport."""

# Language hints used for code fences, keyed by exact file name or extension.
LANGUAGE_MAP: dict[str, str] = {
    # Python
    ".py": "python",
    ".pyi": "python",
    ".pyw": "python",
    "pyproject.toml": "toml",
    "requirements.txt": "text",
    "setup.cfg": "ini",
    "tox.ini": "ini",
    # JavaScript/TypeScript
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "jsx",
    ".ts": "typescript",
    ".tsx": "tsx",
    # Web
    ".html": "html",
    ".htm": "html",
    ".css": "css",
    ".scss": "scss",
    ".less": "less",
    ".vue": "vue",
    ".svg": "xml",
    # JVM
    ".java": "java",
    ".kt": "kotlin",
    ".kts": "kotlin",
    ".groovy": "groovy",
    ".gradle": "groovy",
    ".scala": "scala",
    # C-family
    ".c": "c",
    ".h": "c",
    ".cpp": "cpp",
    ".hpp": "cpp",
    ".cc": "cpp",
    ".cxx": "cpp",
    ".hxx": "cpp",
    ".cs": "csharp",
    ".xaml": "xml",
    "CMakeLists.txt": "cmake",
    # Other languages
    ".go": "go",
    ".rs": "rust",
    ".rb": "ruby",
    ".php": "php",
    ".swift": "swift",
    ".dart": "dart",
    ".lua": "lua",
    # Shell & scripts
    ".sh": "bash",
    ".bash": "bash",
    ".zsh": "zsh",
    ".ps1": "powershell",
    ".psm1": "powershell",
    ".psd1": "powershell",
    ".bat": "batch",
    ".cmd": "batch",
    # Config & data
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".xml": "xml",
    ".toml": "toml",
    ".ini": "ini",
    ".cfg": "ini",
    ".conf": "ini",
    ".csv": "csv",
    # Database
    ".sql": "sql",
    ".psql": "sql",
    ".mysql": "sql",
    # Docker
    "dockerfile": "dockerfile",
    "Dockerfile": "dockerfile",
    "docker-compose.yml": "yaml",
    "docker-compose.yaml": "yaml",
    ".dockerignore": "text",
    # Docs & text
    ".md": "markdown",
    ".markdown": "markdown",
    ".txt": "text",
    ".rst": "rst",
    "README": "markdown",
    "LICENSE": "text",
    # Build
    "makefile": "makefile",
    "Makefile": "makefile",
    # VCS
    ".gitignore": "text",
    ".gitattributes": "text",
    ".editorconfig": "ini",
}

ALWAYS_IGNORE_PATTERNS: set[str] = {
    # Version control
    ".git/",
    ".svn/",
    ".hg/",
    # Dependencies
    "node_modules/",
    "bower_components/",
    "vendor/",
    # Build outputs
    ".next/",
    "out/",
    "dist/",
    "build/",
    "target/",
    "bin/",
    "obj/",
    ".cache/",
    # Python
    "__pycache__/",
    "*.pyc",
    "*.pyo",
    ".venv/",
    "venv/",
    ".pytest_cache/",
    ".mypy_cache/",
    ".ruff_cache/",
    "*.egg-info/",
    ".tox/",
    # IDEs & OS
    ".idea/",
    ".vscode/",
    ".vs/",
    "*.swp",
    ".DS_Store",
    "Thumbs.db",
    # Logs, databases & lock files
    "*.log",
    "*.sqlite",
    "*.db",
    "*.lock",
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
}

# File categories for the statistics section
FILE_CATEGORIES: dict[str, set[str]] = {
    "source": {
        ".py",
        ".js",
        ".ts",
        ".java",
        ".go",
        ".rs",
        ".rb",
        ".php",
        ".cpp",
        ".c",
        ".cs",
        ".ps1",
        ".psm1",
        ".sql",
    },
    "config": {".json", ".yaml", ".yml", ".toml", ".ini", ".cfg", ".conf"},
    "docker": {"dockerfile", "docker-compose.yml", "docker-compose.yaml", ".dockerignore"},
    "web": {".html", ".htm", ".css", ".scss", ".less", ".vue"},
    "build": {"makefile", "cmakelists.txt"},
    "docs": {".md", ".markdown", ".rst", ".txt"},
}

# Files above this size (bytes) are skipped; 0 disables the limit.
DEFAULT_MAX_FILE_SIZE = 1024 * 1024

DEFAULT_OUTPUT_FILE = "code_summary.md"

# Markdown normalization
DEFAULT_TITLE = "Source Code Export"
MAX_CODE_LINE_LENGTH = 120
WRAP_WIDTH = 118
TAB_WIDTH = 4
