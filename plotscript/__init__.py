"""plotscript — figure rendering through {{name}} text templates."""

from plotscript.template import (
    Data,
    Template,
    TemplateError,
    UnmatchedVariable,
    compile_template,
    render_string,
    render_template,
)

__version__ = "0.1.0"

__all__ = [
    "Data",
    "Template",
    "TemplateError",
    "UnmatchedVariable",
    "compile_template",
    "render_string",
    "render_template",
]
