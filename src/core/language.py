"""Filename to programming language lookup used inside review prompts."""

from pathlib import PurePosixPath

DEFAULT_LANGUAGE = "plain text"

EXTENSION_LANGUAGES = {
    # JVM
    ".java": "Java",
    ".kt": "Kotlin",
    ".kts": "Kotlin",
    ".scala": "Scala",
    ".groovy": "Groovy",
    ".gradle": "Groovy",
    # Python
    ".py": "Python",
    ".pyi": "Python",
    # Web
    ".js": "JavaScript",
    ".mjs": "JavaScript",
    ".cjs": "JavaScript",
    ".jsx": "JavaScript",
    ".ts": "TypeScript",
    ".tsx": "TypeScript",
    ".html": "HTML",
    ".htm": "HTML",
    ".css": "CSS",
    ".scss": "SCSS",
    ".vue": "Vue",
    ".svelte": "Svelte",
    ".php": "PHP",
    # Systems
    ".c": "C",
    ".h": "C",
    ".cpp": "C++",
    ".cc": "C++",
    ".cxx": "C++",
    ".hpp": "C++",
    ".rs": "Rust",
    ".go": "Go",
    ".swift": "Swift",
    ".m": "Objective-C",
    # .NET
    ".cs": "C#",
    ".fs": "F#",
    ".vb": "Visual Basic",
    # Scripting
    ".rb": "Ruby",
    ".pl": "Perl",
    ".lua": "Lua",
    ".sh": "Shell",
    ".bash": "Shell",
    ".zsh": "Shell",
    ".ps1": "PowerShell",
    ".dart": "Dart",
    ".ex": "Elixir",
    ".exs": "Elixir",
    ".erl": "Erlang",
    ".hs": "Haskell",
    ".r": "R",
    ".sql": "SQL",
    # Config / data
    ".yml": "YAML",
    ".yaml": "YAML",
    ".json": "JSON",
    ".toml": "TOML",
    ".xml": "XML",
    ".ini": "INI",
    ".properties": "Java Properties",
    ".proto": "Protocol Buffers",
    ".graphql": "GraphQL",
    ".tf": "Terraform",
    ".md": "Markdown",
}

FILENAME_LANGUAGES = {
    "dockerfile": "Dockerfile",
    "makefile": "Makefile",
    "jenkinsfile": "Groovy",
    "gemfile": "Ruby",
    "rakefile": "Ruby",
}


class LanguageDetector:
    """Maps a file path to a human readable language label.

    Total over its input: unknown extensions resolve to ``DEFAULT_LANGUAGE``.
    """

    def __init__(
        self,
        extensions: dict[str, str] | None = None,
        default: str = DEFAULT_LANGUAGE,
    ) -> None:
        self.extensions = {k.lower(): v for k, v in (extensions or EXTENSION_LANGUAGES).items()}
        self.default = default

    def detect(self, filename: str) -> str:
        path = PurePosixPath(filename or "")
        name = path.name.lower()

        if name in FILENAME_LANGUAGES:
            return FILENAME_LANGUAGES[name]

        return self.extensions.get(path.suffix.lower(), self.default)
