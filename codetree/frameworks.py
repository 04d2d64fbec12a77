"""Framework heuristics driven by manifest files in the project root."""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from .logging import get_logger

UNKNOWN_VERSION = "?"
CSPROJ_SCAN_DEPTH = 3

logger = get_logger("frameworks")


class FrameworkCategory(str, Enum):
    FRONTEND = "Frontend"
    BACKEND = "Backend"
    TESTING = "Testing"
    OTHER = "Other"


class Framework(Enum):
    """Known frameworks, each tagged with the category used for grouping."""

    REACT = ("React", FrameworkCategory.FRONTEND)
    VUE = ("Vue.js", FrameworkCategory.FRONTEND)
    ANGULAR = ("Angular", FrameworkCategory.FRONTEND)
    NEXT = ("Next.js", FrameworkCategory.FRONTEND)
    THREE = ("Three.js", FrameworkCategory.FRONTEND)
    SVELTE = ("Svelte", FrameworkCategory.FRONTEND)
    TAILWIND = ("Tailwind CSS", FrameworkCategory.FRONTEND)
    MATERIAL_UI = ("Material UI", FrameworkCategory.FRONTEND)
    BOOTSTRAP = ("Bootstrap", FrameworkCategory.FRONTEND)
    CHAKRA_UI = ("Chakra UI", FrameworkCategory.FRONTEND)
    EXPRESS = ("Express.js", FrameworkCategory.BACKEND)
    NESTJS = ("NestJS", FrameworkCategory.BACKEND)
    FASTIFY = ("Fastify", FrameworkCategory.BACKEND)
    DJANGO = ("Django", FrameworkCategory.BACKEND)
    FLASK = ("Flask", FrameworkCategory.BACKEND)
    FASTAPI = ("FastAPI", FrameworkCategory.BACKEND)
    RAILS = ("Ruby on Rails", FrameworkCategory.BACKEND)
    LARAVEL = ("Laravel", FrameworkCategory.BACKEND)
    SYMFONY = ("Symfony", FrameworkCategory.BACKEND)
    SPRING_BOOT = ("Spring Boot", FrameworkCategory.BACKEND)
    ASPNET_CORE = ("ASP.NET Core", FrameworkCategory.BACKEND)
    JEST = ("Jest", FrameworkCategory.TESTING)
    CYPRESS = ("Cypress", FrameworkCategory.TESTING)
    PYTEST = ("Pytest", FrameworkCategory.TESTING)
    REDUX = ("Redux", FrameworkCategory.OTHER)
    MOBX = ("MobX", FrameworkCategory.OTHER)
    SQLALCHEMY = ("SQLAlchemy", FrameworkCategory.OTHER)
    HIBERNATE = ("Hibernate", FrameworkCategory.OTHER)

    def __init__(self, display_name: str, category: FrameworkCategory) -> None:
        self.display_name = display_name
        self.category = category


# Checked in order; a framework matches when any of its package names appears
# quoted in package.json. The first name that yields a version wins.
_JS_PACKAGES: Tuple[Tuple[Framework, Tuple[str, ...]], ...] = (
    (Framework.REACT, ("react",)),
    (Framework.VUE, ("vue",)),
    (Framework.ANGULAR, ("@angular/core",)),
    (Framework.NEXT, ("next",)),
    (Framework.THREE, ("three",)),
    (Framework.SVELTE, ("svelte",)),
    (Framework.TAILWIND, ("tailwindcss",)),
    (Framework.MATERIAL_UI, ("@mui/material", "@material-ui/core")),
    (Framework.BOOTSTRAP, ("bootstrap",)),
    (Framework.CHAKRA_UI, ("@chakra-ui/react",)),
    (Framework.EXPRESS, ("express",)),
    (Framework.NESTJS, ("@nestjs/core",)),
    (Framework.FASTIFY, ("fastify",)),
    (Framework.REDUX, ("redux",)),
    (Framework.MOBX, ("mobx",)),
    (Framework.JEST, ("jest",)),
    (Framework.CYPRESS, ("cypress",)),
)

_PYTHON_REQUIREMENTS: Tuple[Tuple[Framework, str], ...] = (
    (Framework.DJANGO, "django"),
    (Framework.FLASK, "flask"),
    (Framework.FASTAPI, "fastapi"),
    (Framework.SQLALCHEMY, "sqlalchemy"),
    (Framework.PYTEST, "pytest"),
)

_POM_MARKERS: Tuple[Tuple[Framework, str], ...] = (
    (Framework.SPRING_BOOT, "spring-boot"),
    (Framework.HIBERNATE, "hibernate"),
)

_ASPNET_MARKER = "Microsoft.AspNetCore"


def extract_version(manifest: str, package: str) -> Optional[str]:
    """Return the version string declared for ``package`` in manifest text.

    A regex over ``"package": "value"`` is tried first; if the pattern cannot
    be compiled or finds nothing, the text is scanned by hand.
    """
    try:
        pattern = re.compile(rf'"{package}"\s*:\s*"([^"]+)"')
    except re.error:
        pattern = None
    if pattern is not None:
        match = pattern.search(manifest)
        if match:
            return match.group(1)
    return _scan_version(manifest, package)


def _scan_version(manifest: str, package: str) -> Optional[str]:
    key = f'"{package}":'
    index = manifest.find(key)
    if index < 0:
        return None
    start = manifest.find('"', index + len(key))
    if start < 0:
        return None
    end = manifest.find('"', start + 1)
    if end <= start + 1:
        return None
    return manifest[start + 1 : end]


def _read_text(path: Path) -> Optional[str]:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Could not read manifest %s: %s", path, exc)
        return None


class FrameworkDetector:
    """Collects framework -> version pairs; missing manifests contribute nothing."""

    def __init__(self) -> None:
        self.frameworks: Dict[Framework, str] = {}

    def _record(self, framework: Framework, version: Optional[str] = None) -> None:
        self.frameworks[framework] = version or UNKNOWN_VERSION
        logger.debug("Detected %s (v%s)", framework.display_name, self.frameworks[framework])

    def detect_js_frameworks(self, package_json: str) -> None:
        for framework, packages in _JS_PACKAGES:
            if not any(f'"{name}"' in package_json for name in packages):
                continue
            version = None
            for name in packages:
                version = extract_version(package_json, name)
                if version:
                    break
            self._record(framework, version)

    def detect_python_frameworks(self, root: Path) -> None:
        requirements = root / "requirements.txt"
        if requirements.exists():
            content = _read_text(requirements)
            if content is not None:
                for framework, needle in _PYTHON_REQUIREMENTS:
                    if needle in content:
                        self._record(framework)

        if (root / "manage.py").exists() and (
            (root / "settings.py").exists() or self._child_has_settings(root)
        ):
            self._record(Framework.DJANGO)

    @staticmethod
    def _child_has_settings(root: Path) -> bool:
        try:
            children = list(root.iterdir())
        except OSError:
            return False
        return any((child / "settings.py").exists() for child in children)

    def detect_ruby_frameworks(self, root: Path) -> None:
        if (root / "config" / "routes.rb").exists():
            self._record(Framework.RAILS)

    def detect_php_frameworks(self, root: Path) -> None:
        if (root / "artisan").exists():
            self._record(Framework.LARAVEL)
        if (
            (root / "bin" / "console").exists()
            and (root / "config").exists()
            and (root / "src" / "Kernel.php").exists()
        ):
            self._record(Framework.SYMFONY)

    def detect_java_frameworks(self, pom_xml: Optional[str]) -> None:
        # Gradle builds carry no detectable markers here.
        if pom_xml is None:
            return
        for framework, needle in _POM_MARKERS:
            if needle in pom_xml:
                self._record(framework)

    def detect_dotnet_frameworks(self, root: Path) -> None:
        for project_file in _iter_csproj(root, CSPROJ_SCAN_DEPTH):
            content = _read_text(project_file)
            if content is not None and _ASPNET_MARKER in content:
                self._record(Framework.ASPNET_CORE)
                break

    def grouped(self) -> Dict[FrameworkCategory, List[Tuple[Framework, str]]]:
        """Frameworks bucketed by category, each bucket sorted by display name."""
        groups: Dict[FrameworkCategory, List[Tuple[Framework, str]]] = {
            category: [] for category in FrameworkCategory
        }
        for framework, version in self.frameworks.items():
            groups[framework.category].append((framework, version))
        for items in groups.values():
            items.sort(key=lambda item: item[0].display_name)
        return groups

    def as_display_dict(self) -> Dict[str, str]:
        return {
            framework.display_name: version
            for framework, version in sorted(
                self.frameworks.items(), key=lambda item: item[0].display_name
            )
        }

    def format_frameworks(self) -> str:
        if not self.frameworks:
            return "No specific frameworks detected\n"

        lines = ["Detected Frameworks:"]
        for category, items in self.grouped().items():
            if not items:
                continue
            lines.append(f"  {category.value} Frameworks:")
            lines.extend(f"    - {fw.display_name} (v{version})" for fw, version in items)
        return "\n".join(lines) + "\n"


def _iter_csproj(root: Path, max_depth: int) -> Iterator[Path]:
    """Yield ``*.csproj`` files at most ``max_depth`` levels below ``root``."""
    pending: List[Tuple[Path, int]] = [(root, 0)]
    while pending:
        directory, depth = pending.pop(0)
        try:
            entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
        except OSError:
            continue
        for entry in entries:
            if entry.is_dir():
                if depth + 1 < max_depth:
                    pending.append((entry, depth + 1))
            elif entry.suffix == ".csproj":
                yield entry


__all__ = [
    "Framework",
    "FrameworkCategory",
    "FrameworkDetector",
    "UNKNOWN_VERSION",
    "extract_version",
]
