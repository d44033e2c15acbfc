"""Languages a host should run the engine for.

The engine itself is language-agnostic; this registry only decides which
files the scanner picks up and which ``language`` values the API accepts.
"""

import os


SUPPORTED_LANGUAGES = ('javascript', 'typescript', 'c', 'cpp', 'csharp', 'java', 'python')

LANGUAGE_EXTENSIONS: dict[str, str] = {
    '.js': 'javascript',
    '.mjs': 'javascript',
    '.cjs': 'javascript',
    '.jsx': 'javascript',
    '.ts': 'typescript',
    '.mts': 'typescript',
    '.cts': 'typescript',
    '.tsx': 'typescript',
    '.c': 'c',
    '.h': 'c',
    '.cc': 'cpp',
    '.cpp': 'cpp',
    '.cxx': 'cpp',
    '.hh': 'cpp',
    '.hpp': 'cpp',
    '.hxx': 'cpp',
    '.cs': 'csharp',
    '.java': 'java',
    '.py': 'python',
    '.pyi': 'python',
}


def detect_language(path: str) -> str | None:
    """Map a file path to a supported language id by its extension."""
    _, ext = os.path.splitext(path)
    return LANGUAGE_EXTENSIONS.get(ext.lower())


def is_supported(language: str) -> bool:
    return language.lower() in SUPPORTED_LANGUAGES
