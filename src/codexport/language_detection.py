"""Language and file category detection utilities."""

import pathlib

from codexport.constants import FILE_CATEGORIES, LANGUAGE_MAP


def get_language_from_path(file_path: pathlib.Path) -> str | None:
    """Determines the code fence language from the file path.

    Args:
        file_path: Path to the file

    Returns:
        Language name string if detected, None otherwise

    Examples:
        >>> get_language_from_path(Path("deploy.ps1"))
        'powershell'
        >>> get_language_from_path(Path("Dockerfile"))
        'dockerfile'
    """
    name_lower = file_path.name.lower()

    if name_lower in LANGUAGE_MAP:
        return LANGUAGE_MAP[name_lower]

    # Case-sensitive names like Makefile
    if file_path.name in LANGUAGE_MAP:
        return LANGUAGE_MAP[file_path.name]

    if file_path.suffix.lower() in LANGUAGE_MAP:
        return LANGUAGE_MAP[file_path.suffix.lower()]

    # Files with no extension are exported as plain text if they decode
    if not file_path.suffix:
        try:
            with open(file_path, encoding="utf-8") as f:
                f.read(512)
            return "text"
        except (OSError, UnicodeDecodeError):
            return None

    return None


def get_file_category(file_path: pathlib.Path) -> str:
    """Categorize file by its purpose.

    Returns:
        Category name from FILE_CATEGORIES, or 'other'
    """
    name_lower = file_path.name.lower()
    suffix_lower = file_path.suffix.lower()

    for category, extensions in FILE_CATEGORIES.items():
        if name_lower in extensions or suffix_lower in extensions:
            return category
    return "other"
