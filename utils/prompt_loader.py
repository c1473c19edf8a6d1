"""
Markdown prompt templates for generation and regeneration requests.

Templates live under prompts/<mode>/<template_name>.md and use str.format
placeholders. Literal braces (JSON examples) are written as {{ and }}.
"""

from pathlib import Path
from typing import Any, Dict, List


class PromptLoader:
    """Read prompt templates once and fill in their variables"""

    MODES = ("generation", "regeneration")

    def __init__(self, prompts_dir: str = "prompts"):
        """
        Args:
            prompts_dir: Template root, relative to the project root
                (an absolute path is used as is)
        """
        self.prompts_dir = Path(__file__).parent.parent / prompts_dir
        self._templates: Dict[Path, str] = {}

    def _template_path(self, template_name: str, mode: str) -> Path:
        return self.prompts_dir / mode / f"{template_name}.md"

    def _read(self, path: Path) -> str:
        if path not in self._templates:
            if not path.is_file():
                raise FileNotFoundError(
                    f"Prompt template not found: {path}\n"
                    f"Known modes: {', '.join(self.MODES)}"
                )
            self._templates[path] = path.read_text(encoding="utf-8")
        return self._templates[path]

    def load(self, template_name: str, mode: str = "generation", **kwargs: Any) -> str:
        """
        Render a template.

        Args:
            template_name: File name without the .md extension
            mode: Sub-directory, "generation" or "regeneration"
            **kwargs: Values for the template placeholders

        Returns:
            Rendered prompt text

        Raises:
            FileNotFoundError: If the template does not exist
            ValueError: If a placeholder has no value

        Example:
            PromptLoader().load("clarifying_question_guidance", max_questions=3)
        """
        template = self._read(self._template_path(template_name, mode))

        try:
            return template.format(**kwargs)
        except KeyError as e:
            raise ValueError(
                f"Template '{mode}/{template_name}' needs a value for '{e.args[0]}'"
            )

    def list_templates(self, mode: str) -> List[str]:
        """Template names available for a mode, sorted"""
        mode_dir = self.prompts_dir / mode
        if not mode_dir.is_dir():
            return []
        return sorted(p.stem for p in mode_dir.glob("*.md"))

    def load_generation(self, template_name: str, **kwargs) -> str:
        return self.load(template_name, mode="generation", **kwargs)

    def load_regeneration(self, template_name: str, **kwargs) -> str:
        return self.load(template_name, mode="regeneration", **kwargs)
