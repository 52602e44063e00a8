"""
reactstarter.documents - Structured Source Documents
====================================================

Composers never splice raw substrings into template files. Instead a file
is loaded as a ``SourceDocument``: an ordered list of import statements at
the top, followed by the body. Edits are expressed against that structure:

- ``add_import``            add an import statement (skipped if the module
                            is already imported)
- ``insert_after_imports``  add a declaration right below the import block
- ``wrap_element``          wrap a JSX element in a provider
- ``insert_after_element``  render a sibling element after an anchor element
- ``insert_array_item``     prepend an entry to an array property such as
                            ``plugins: [...]``

Every edit takes a marker and is a no-op if the marker is already present,
so applying a composer twice leaves the file unchanged. An edit whose anchor
cannot be found raises ``PatchError``; composers turn that into a warning
rather than silently doing nothing.

Example
-------
>>> doc = SourceDocument("import react from '@vitejs/plugin-react'\\n\\n"
...                      "export default defineConfig({\\n  plugins: [react()],\\n})\\n")
>>> doc.add_import("import tailwindcss from '@tailwindcss/vite'")
True
>>> doc.insert_array_item("plugins", "tailwindcss()")
True
>>> print(doc.text)
import react from '@vitejs/plugin-react'
import tailwindcss from '@tailwindcss/vite'
<BLANKLINE>
export default defineConfig({
  plugins: [tailwindcss(), react()],
})
<BLANKLINE>
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from reactstarter.errors import PatchError


# =============================================================================
# Import Parsing
# =============================================================================

# `import x from 'y'`, `import { a,\n b } from "y";`, `import type T from 'y'`
_FROM_IMPORT_RE = re.compile(
    r"""^import\s[\s\S]*?\bfrom\s*(['"])(?P<source>[^'"]+)\1\s*;?\s*$"""
)
# `import './index.css'`
_SIDE_EFFECT_IMPORT_RE = re.compile(r"""^import\s*(['"])(?P<source>[^'"]+)\1\s*;?\s*$""")

# Longest import statement we are willing to scan for its closing line.
_MAX_IMPORT_LINES = 64


@dataclass(frozen=True)
class ImportStatement:
    """
    One import statement of a document.

    Attributes
    ----------
    source : str
        Module specifier, e.g. ``react`` or ``./index.css``.

    start : int
        Index of the first line.

    end : int
        Index one past the last line.
    """

    source: str
    start: int
    end: int


def parse_import_source(statement: str) -> str | None:
    """Module specifier of an import statement, or None if it is not one."""
    statement = statement.strip()
    for pattern in (_SIDE_EFFECT_IMPORT_RE, _FROM_IMPORT_RE):
        match = pattern.match(statement)
        if match:
            return match.group("source")
    return None


def _is_header_filler(line: str) -> bool:
    stripped = line.strip()
    return (
        not stripped
        or stripped.startswith("//")
        or (stripped.startswith("/*") and stripped.endswith("*/"))
        or stripped in {"'use client'", '"use client"', "'use client';", '"use client";'}
    )


def parse_imports(lines: list[str]) -> list[ImportStatement]:
    """
    Find the import statements at the top of a file.

    Scanning stops at the first line that is neither an import, a blank
    line nor a single-line comment.
    """
    imports: list[ImportStatement] = []
    index = 0

    while index < len(lines):
        line = lines[index]

        if _is_header_filler(line):
            index += 1
            continue

        if not re.match(r"^import[\s'\"{*]", line):
            break

        end = index
        statement = line
        source = parse_import_source(statement)
        while source is None and end + 1 < len(lines) and end - index < _MAX_IMPORT_LINES:
            end += 1
            statement = f"{statement}\n{lines[end]}"
            source = parse_import_source(statement)

        if source is None:
            break

        imports.append(ImportStatement(source=source, start=index, end=end + 1))
        index = end + 1

    return imports


def _indent_of(line: str) -> str:
    return line[: len(line) - len(line.lstrip())]


# =============================================================================
# Document
# =============================================================================

class SourceDocument:
    """
    A template file modelled as an import block followed by a body.

    Parameters
    ----------
    text : str
        File content.

    path : Path | None
        Where the document was loaded from; required for ``save``.

    Attributes
    ----------
    imports : list[ImportStatement]
        Import statements in file order. Re-parsed after every edit.

    changed : bool
        Whether any edit modified the document.
    """

    def __init__(self, text: str, path: Path | None = None) -> None:
        self.path = path
        self._trailing_newline = text.endswith("\n")
        self._lines = text.splitlines()
        self.imports = parse_imports(self._lines)
        self.changed = False

    @classmethod
    def load(cls, path: Path) -> SourceDocument:
        """
        Read a document from disk.

        Raises
        ------
        FileNotFoundError
            If ``path`` does not exist.
        """
        return cls(path.read_text(encoding="utf-8"), path=path)

    def save(self) -> bool:
        """
        Write the document back to its path if it was changed.

        Returns
        -------
        bool
            True if the file was written.
        """
        if self.path is None:
            raise ValueError("Document has no path to save to")
        if not self.changed:
            return False
        self.path.write_text(self.text, encoding="utf-8")
        return True

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def text(self) -> str:
        body = "\n".join(self._lines)
        if self._trailing_newline and self._lines:
            body += "\n"
        return body

    def contains(self, marker: str) -> bool:
        return marker in self.text

    def has_import(self, source: str) -> bool:
        """Whether any import statement loads ``source``."""
        return any(statement.source == source for statement in self.imports)

    def count(self, marker: str) -> int:
        return self.text.count(marker)

    # -------------------------------------------------------------------------
    # Edits
    # -------------------------------------------------------------------------

    def _replace_lines(self, start: int, end: int, new_lines: list[str]) -> None:
        self._lines[start:end] = new_lines
        self.imports = parse_imports(self._lines)
        self.changed = True

    def _find_line(self, anchor: str) -> int:
        for index, line in enumerate(self._lines):
            if anchor in line:
                return index
        location = f" in {self.path.name}" if self.path else ""
        raise PatchError(f"Could not find '{anchor}'{location}")

    def add_import(self, statement: str, *, before: str | None = None) -> bool:
        """
        Add an import statement to the import block.

        Parameters
        ----------
        statement : str
            Full statement, e.g. ``import i18n from './i18n'``.

        before : str | None
            Module specifier of an existing import to insert in front of
            (used to keep the stylesheet import last). Falls back to the end
            of the import block when that module is not imported.

        Returns
        -------
        bool
            False if the module was already imported.
        """
        source = parse_import_source(statement)
        if source is None:
            raise ValueError(f"Not an import statement: {statement!r}")

        if self.has_import(source):
            return False

        position = 0
        if self.imports:
            position = self.imports[-1].end
        if before is not None:
            for existing in self.imports:
                if existing.source == before:
                    position = existing.start
                    break

        self._replace_lines(position, position, statement.splitlines())
        return True

    def insert_after_imports(self, block: str, *, marker: str) -> bool:
        """
        Insert a declaration directly below the import block.

        The block is separated from the imports and from the following code
        by blank lines.
        """
        if self.contains(marker):
            return False

        position = self.imports[-1].end if self.imports else 0
        new_lines = ["", *block.splitlines()]
        if position < len(self._lines) and self._lines[position].strip():
            new_lines.append("")

        self._replace_lines(position, position, new_lines)
        return True

    def wrap_element(
        self,
        element: str,
        open_tag: str,
        close_tag: str,
        *,
        marker: str,
    ) -> bool:
        """
        Wrap a JSX element in an enclosing element.

        ``<RouterProvider router={router} />`` becomes::

            <I18nextProvider i18n={i18n}>
              <RouterProvider router={router} />
            </I18nextProvider>

        keeping the indentation of the original line and whatever text
        surrounded the element on that line.

        Raises
        ------
        PatchError
            If ``element`` does not occur in the document.
        """
        if self.contains(marker):
            return False

        index = self._find_line(element)
        line = self._lines[index]
        indent = _indent_of(line)
        prefix, _, suffix = line.partition(element)

        new_lines = [
            f"{prefix}{open_tag}",
            f"{indent}  {element}",
            f"{indent}{close_tag}{suffix}",
        ]
        self._replace_lines(index, index + 1, new_lines)
        return True

    def insert_after_element(self, anchor: str, line: str, *, marker: str) -> bool:
        """
        Add ``line`` after the line containing ``anchor``, at the same indent.

        Raises
        ------
        PatchError
            If ``anchor`` does not occur in the document.
        """
        if self.contains(marker):
            return False

        index = self._find_line(anchor)
        indent = _indent_of(self._lines[index])
        self._replace_lines(index + 1, index + 1, [f"{indent}{line}"])
        return True

    def insert_array_item(self, key: str, item: str, *, marker: str | None = None) -> bool:
        """
        Prepend ``item`` to the array literal assigned to ``key``.

        Handles both one-line (``plugins: [react()]``) and multi-line arrays.

        Parameters
        ----------
        key : str
            Property name, e.g. ``plugins``.

        item : str
            Expression to insert, without a trailing comma.

        marker : str | None
            Idempotency marker; defaults to ``item``.

        Raises
        ------
        PatchError
            If no ``key: [`` is found.
        """
        if self.contains(marker or item):
            return False

        text = self.text
        match = re.search(rf"\b{re.escape(key)}\s*:\s*\[", text)
        if match is None:
            location = f" in {self.path.name}" if self.path else ""
            raise PatchError(f"Could not find '{key}: [' array{location}")

        position = match.end()
        rest_of_line = text[position:].split("\n", 1)[0]

        if rest_of_line.strip():
            separator = "" if rest_of_line.lstrip().startswith("]") else ", "
            insertion = f"{item}{separator}"
        else:
            line_start = text.rfind("\n", 0, match.start()) + 1
            key_indent = _indent_of(text[line_start:match.start()] + "x")
            following = text[position:].split("\n")[1:]
            next_line = next((candidate for candidate in following if candidate.strip()), "")
            if next_line.strip().startswith("]") or not next_line:
                item_indent = f"{key_indent}  "
            else:
                item_indent = _indent_of(next_line)
            insertion = f"\n{item_indent}{item},"

        new_text = text[:position] + insertion + text[position:]
        trailing = new_text.endswith("\n")
        self._lines = new_text.splitlines()
        self._trailing_newline = trailing
        self.imports = parse_imports(self._lines)
        self.changed = True
        return True
