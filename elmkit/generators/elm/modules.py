"""
Elm module assembly and file output.

Wraps generated declarations in a module header with the import preamble and
writes the result under a source directory following Elm's
``Module/Name.elm`` layout.
"""

import logging
from pathlib import Path
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from elmkit.core.constants import DEFAULT_ELM_IMPORTS


logger = logging.getLogger(__name__)

GENERATED_NOTICE = """{-
  Auto-generated by ElmKit from FastAPI routes and models - DO NOT EDIT
  Changes will be overwritten on regeneration.
-}"""


@dataclass
class ElmSpec:
    """A module name paired with the declarations that make up its body."""
    module_name: str
    declarations: List[str] = field(default_factory=list)
    imports: List[str] = field(default_factory=lambda: list(DEFAULT_ELM_IMPORTS))

    def get_relative_path(self) -> Path:
        return Path(*self.module_name.split(".")).with_suffix(".elm")

    def render(self) -> str:
        return render_elm_module(self.module_name, self.declarations, self.imports)


def render_elm_module(
    module_name: str,
    declarations: Iterable[str],
    imports: Iterable[str] = DEFAULT_ELM_IMPORTS
) -> str:
    """Render a complete Elm module exposing everything it declares."""
    sections = [
        f"module {module_name} exposing (..)",
        GENERATED_NOTICE,
        "\n".join(imports),
    ]
    sections.extend(declarations)
    return "\n\n\n".join(section for section in sections if section) + "\n"


def specs_to_dir(specs: Iterable[ElmSpec], location: str) -> Dict[str, str]:
    """
    Write each spec to ``location/Module/Name.elm``.

    Returns:
        Dict mapping written file path -> file content
    """
    written = {}
    for spec in specs:
        file_path = Path(location) / spec.get_relative_path()
        file_path.parent.mkdir(parents=True, exist_ok=True)

        content = spec.render()
        with open(file_path, 'w', encoding='utf-8') as f:
            f.write(content)

        logger.debug(f"Generated: {file_path}")
        written[str(file_path)] = content
    return written
