"""Jinja2 template rendering for the microservice skeleton.

Provides the TemplateRenderer class which loads templates from the
``src/scaffolder/templates/`` directory (or any injected Jinja2 loader) and
materialises the static :data:`TEMPLATE_MAPPING` into a destination tree.
Path computation (:meth:`TemplateRenderer.plan`) is pure; all writes go
through a pluggable :class:`FileWriter`.
"""

from __future__ import annotations

import asyncio
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Protocol

from jinja2 import (
    BaseLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
)
from jinja2.exceptions import FilterArgumentError

from .answers import AnswerSet
from .errors import TemplateRenderFailure


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

_TEMPLATE_SUFFIX = ".j2"


# ---------------------------------------------------------------------------
# Mapping table
# ---------------------------------------------------------------------------


class ConflictPolicy(str, Enum):
    """What to do when a destination file already exists."""

    OVERWRITE = "overwrite"
    FAIL = "fail"


@dataclass(frozen=True)
class TemplateMapping:
    """A template file or directory and where it lands.

    ``destination`` may reference answer keys as ``{srcDir}``-style
    placeholders.  With ``render=False`` every file is copied verbatim;
    otherwise ``*.j2`` files are rendered (and lose the suffix) and the rest
    are copied verbatim.
    """

    template_id: str
    destination: str
    render: bool = True


@dataclass(frozen=True)
class RenderTarget:
    """One concrete file produced by expanding a :class:`TemplateMapping`."""

    template_name: str
    destination: Path
    render: bool
    mapping_destination: Path


TEMPLATE_MAPPING: tuple[TemplateMapping, ...] = (
    TemplateMapping("api", "{srcDir}/api"),
    TemplateMapping("express", "{srcDir}/express"),
    TemplateMapping("package.json.j2", "{srcDir}/package.json"),
    TemplateMapping("index.js.j2", "{srcDir}/index.js"),
    TemplateMapping("config.js.j2", "{srcDir}/config.js"),
)


# ---------------------------------------------------------------------------
# File writers
# ---------------------------------------------------------------------------


class FileWriter(Protocol):
    """Write capability used by the renderer."""

    def exists(self, path: Path) -> bool: ...

    def write_text(self, path: Path, content: str) -> None: ...


class DiskWriter:
    """Writes to the local filesystem, creating parent directories."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def write_text(self, path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders the microservice templates with answer-set context.

    Templates are looked up through a Jinja2 loader.  Undefined variables are
    errors (``StrictUndefined``), so a template referencing an unknown answer
    fails loudly instead of producing an empty string.
    """

    def __init__(
        self,
        template_dir: str | Path | None = None,
        *,
        loader: BaseLoader | None = None,
        writer: FileWriter | None = None,
        conflict: ConflictPolicy = ConflictPolicy.OVERWRITE,
        on_write: Callable[[str, Path], None] | None = None,
    ) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        if loader is None:
            loader = FileSystemLoader(str(self.template_dir))
        self.env = Environment(
            loader=loader,
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["slugify"] = _slugify_filter
        self.writer: FileWriter = writer or DiskWriter()
        self.conflict = ConflictPolicy(conflict)
        self.on_write = on_write
        # Files written by the current/last render_mappings call.
        self.written: list[Path] = []

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: Mapping[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Name relative to the template root (e.g.
                ``"config.js.j2"``).
            context: Variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    def source(self, template_path: str) -> str:
        """Return a template's raw text, for verbatim copies."""
        source, _filename, _uptodate = self.env.loader.get_source(self.env, template_path)
        return source

    # -- Path computation --------------------------------------------------

    @staticmethod
    def destination_for(mapping: TemplateMapping, context: Mapping[str, str]) -> Path:
        """Substitute answer placeholders in a mapping's destination."""
        try:
            return Path(mapping.destination.format_map(context))
        except (KeyError, IndexError, ValueError) as exc:
            raise TemplateRenderFailure(
                mapping.template_id,
                mapping.destination,
                f"bad destination placeholder: {exc}",
            ) from exc

    def plan(
        self,
        answers: AnswerSet,
        mappings: Sequence[TemplateMapping] = TEMPLATE_MAPPING,
        root: str | Path = ".",
    ) -> list[RenderTarget]:
        """Expand *mappings* into the concrete files a render would write.

        Directory entries are expanded through the loader's template list
        (sorted), single-file entries map one-to-one.  No file is touched.

        Raises:
            TemplateRenderFailure: If a mapping names no known template.
        """
        context = answers.as_context()
        available = self.env.list_templates()
        base = Path(root)
        targets: list[RenderTarget] = []

        for mapping in mappings:
            entry_dest = self.destination_for(mapping, context)
            out = base / entry_dest

            if mapping.template_id in available:
                targets.append(
                    RenderTarget(
                        template_name=mapping.template_id,
                        destination=out,
                        render=_should_render(mapping, mapping.template_id),
                        mapping_destination=entry_dest,
                    )
                )
                continue

            prefix = mapping.template_id.rstrip("/") + "/"
            members = sorted(name for name in available if name.startswith(prefix))
            if not members:
                raise TemplateRenderFailure(mapping.template_id, out, "template not found")

            for name in members:
                rel = name[len(prefix):]
                render = _should_render(mapping, name)
                if render:
                    rel = rel[: -len(_TEMPLATE_SUFFIX)]
                targets.append(
                    RenderTarget(
                        template_name=name,
                        destination=out / rel,
                        render=render,
                        mapping_destination=entry_dest,
                    )
                )

        return targets

    # -- File-based rendering (async) --------------------------------------

    async def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: Mapping[str, Any],
        *,
        render: bool = True,
    ) -> Path:
        """Render (or copy) a template and write the result to *output_path*.

        Honours the conflict policy and reports ``create``/``force`` through
        ``on_write``.

        Raises:
            TemplateRenderFailure: On a missing/broken template, an existing
                destination under ``ConflictPolicy.FAIL``, or a write error.
        """
        out = Path(output_path)
        existed = await asyncio.to_thread(self.writer.exists, out)
        if existed and self.conflict is ConflictPolicy.FAIL:
            raise TemplateRenderFailure(template_path, out, "destination already exists")

        try:
            content = self.render(template_path, context) if render else self.source(template_path)
        except TemplateError as exc:
            raise TemplateRenderFailure(template_path, out, str(exc) or type(exc).__name__) from exc

        try:
            await asyncio.to_thread(self.writer.write_text, out, content)
        except OSError as exc:
            raise TemplateRenderFailure(template_path, out, str(exc)) from exc

        if self.on_write is not None:
            self.on_write("force" if existed else "create", out)
        return out

    async def render_mappings(
        self,
        answers: AnswerSet,
        root: str | Path,
        mappings: Sequence[TemplateMapping] = TEMPLATE_MAPPING,
    ) -> list[Path]:
        """Write every file of the plan under *root*, in plan order.

        Stops at the first failure; files already written stay in place.

        Returns:
            List of written file paths.
        """
        context = answers.as_context()
        self.written = []
        for target in self.plan(answers, mappings, root):
            path = await self.render_to_file(
                target.template_name,
                target.destination,
                context,
                render=target.render,
            )
            self.written.append(path)
        return list(self.written)


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _slugify_filter(value: str) -> str:
    """Convert a string to an npm/URL-safe slug.

    Raises:
        FilterArgumentError: If *value* has no ASCII letters or digits, since
            an empty package name is not a valid npm manifest.
    """
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower().strip()).strip("-")
    if not slug:
        raise FilterArgumentError(f"cannot build a package name from {value!r}")
    return slug


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _should_render(mapping: TemplateMapping, name: str) -> bool:
    return mapping.render and name.endswith(_TEMPLATE_SUFFIX)
