"""Exclusion rules and sensitive-file heuristics used during the walk."""

from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, Set, Tuple

BASE_EXCLUDED_DIRS: FrozenSet[str] = frozenset(
    {
        ".idea",
        ".git",
        ".github",
        ".gitlab",
        ".vscode",
        ".venv",
        "cache",
        "fonts",
        "obj",
        "out",
    }
)

EXCLUDED_FILES: FrozenSet[str] = frozenset(
    {
        ".DS_Store",
        ".env",
        ".eslintrc.json",
        ".gitignore",
        ".npmignore",
        "Cargo.lock",
        "eslint.config.js",
        "favicon.ico",
        "globals.css",
        "next.config.mjs",
        "next-env.d.ts",
        "postcss.config.js",
        "postcss.config.mjs",
        "README.md",
        "package-lock.json",
        "pnpm-lock.yaml",
        "tailwind.config.js",
        "tailwind.config.ts",
        "tsconfig.app.json",
        "tsconfig.node.json",
        "tsconfig.json",
        "thumbs.db",
        "vite.config.ts",
        "yarn.lock",
    }
)

SENSITIVE_FILE_SUFFIXES: Tuple[str, ...] = (
    ".env",
    ".env.local",
    ".env.development",
    ".env.production",
    ".env.test",
    "config.json",
    "secrets.json",
    "credentials.json",
    "aws-config.json",
    "firebase-config.json",
    "database.yml",
    "settings.py",
    "config.py",
    "wp-config.php",
    "application.properties",
)

_DIRECTORY_REASONS: Dict[str, str] = {
    "target": "Rust/Java build directory",
    "node_modules": "Node.js dependencies",
    "dist": "Build output directory",
    "build": "Build output directory",
    "__pycache__": "Python cache directory",
    ".pytest_cache": "Pytest cache directory",
    "venv": "Python virtual environment",
    ".gradle": "Gradle cache directory",
    "bin": ".NET build directory",
    "obj": ".NET build directory",
    "vendor": "Dependencies directory",
    "assets": "Static assets directory",
    "asset": "Static assets directory",
    "public": "Static assets directory",
}

_FILE_REASONS: Dict[str, str] = {
    ".DS_Store": "macOS system file",
    ".env": "Environment configuration file",
    ".eslintrc.json": "ESLint configuration",
    "eslint.config.js": "ESLint configuration",
    ".gitignore": "Version control ignore file",
    ".npmignore": "Version control ignore file",
    "Cargo.lock": "Dependency lock file",
    "package-lock.json": "Dependency lock file",
    "pnpm-lock.yaml": "Dependency lock file",
    "yarn.lock": "Dependency lock file",
    "favicon.ico": "Website icon file",
    "globals.css": "Global CSS file",
    "next.config.mjs": "Next.js configuration",
    "next-env.d.ts": "Next.js configuration",
    "postcss.config.js": "PostCSS configuration",
    "postcss.config.mjs": "PostCSS configuration",
    "README.md": "Documentation file",
    "tailwind.config.js": "Tailwind CSS configuration",
    "tailwind.config.ts": "Tailwind CSS configuration",
    "tsconfig.app.json": "TypeScript configuration",
    "tsconfig.node.json": "TypeScript configuration",
    "tsconfig.json": "TypeScript configuration",
    "thumbs.db": "Windows thumbnail cache",
    "vite.config.ts": "Vite configuration",
}

BASE_REASON = "Base excluded directory"
PROJECT_REASON = "Project-specific excluded directory"
UNKNOWN_REASON = "Unknown exclusion reason"
FILE_FALLBACK_REASON = "Configuration/system file"


class ExclusionRuleSet:
    """Directory and file names skipped during traversal.

    Base directory names are fixed at construction. Project-specific names
    can only be added, never removed, and the set is sealed before the walk.
    """

    def __init__(
        self,
        base_dirs: Iterable[str] = BASE_EXCLUDED_DIRS,
        excluded_files: Iterable[str] = EXCLUDED_FILES,
    ) -> None:
        self._base_dirs: FrozenSet[str] = frozenset(base_dirs)
        self._project_dirs: Set[str] = set()
        self._files: FrozenSet[str] = frozenset(excluded_files)
        self._sealed = False

    @property
    def base_dirs(self) -> FrozenSet[str]:
        return self._base_dirs

    @property
    def project_dirs(self) -> FrozenSet[str]:
        """Names added after construction, excluding any that are already base names."""
        return frozenset(self._project_dirs - self._base_dirs)

    @property
    def directories(self) -> FrozenSet[str]:
        return self._base_dirs | self._project_dirs

    @property
    def files(self) -> FrozenSet[str]:
        return self._files

    @property
    def sealed(self) -> bool:
        return self._sealed

    def add_dirs(self, *names: str) -> None:
        if self._sealed:
            raise RuntimeError("Exclusion rules are read-only once the walk has started")
        self._project_dirs.update(names)

    def add_files(self, *names: str) -> None:
        if self._sealed:
            raise RuntimeError("Exclusion rules are read-only once the walk has started")
        self._files = self._files | frozenset(names)

    def seal(self) -> None:
        self._sealed = True


class ExclusionPolicy:
    """Answers "skip this?" and "why?" against a rule set."""

    def __init__(self, rules: ExclusionRuleSet) -> None:
        self.rules = rules

    def should_exclude_dir(self, name: str) -> bool:
        return name in self.rules.base_dirs or name in self.rules.project_dirs

    def should_exclude_file(self, name: str) -> bool:
        return name in self.rules.files

    def reason_for(self, name: str) -> str:
        """Human-readable category for an excluded directory name."""
        if name in self.rules.base_dirs:
            return BASE_REASON
        if name in self.rules.project_dirs:
            return _DIRECTORY_REASONS.get(name, PROJECT_REASON)
        return UNKNOWN_REASON

    def file_reason_for(self, name: str) -> str:
        return _FILE_REASONS.get(name, FILE_FALLBACK_REASON)


class SensitiveFileSet:
    """File name suffixes whose content is never copied into a report."""

    def __init__(self, suffixes: Iterable[str] = SENSITIVE_FILE_SUFFIXES) -> None:
        self._suffixes: Tuple[str, ...] = tuple(suffixes)

    @classmethod
    def with_extra(cls, extra: Iterable[str]) -> "SensitiveFileSet":
        combined = list(SENSITIVE_FILE_SUFFIXES)
        combined.extend(suffix for suffix in extra if suffix not in combined)
        return cls(combined)

    @property
    def suffixes(self) -> Tuple[str, ...]:
        return self._suffixes

    def is_sensitive(self, file_name: str) -> bool:
        return file_name.endswith(self._suffixes)


__all__ = [
    "BASE_EXCLUDED_DIRS",
    "EXCLUDED_FILES",
    "SENSITIVE_FILE_SUFFIXES",
    "ExclusionPolicy",
    "ExclusionRuleSet",
    "SensitiveFileSet",
]
