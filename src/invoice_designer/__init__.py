"""Top-level package for the invoice template designer.

Provides subpackages:
- invoice_designer.core – design data model, schema validation, serialization
- invoice_designer.designer – editing session (selection, history, snapping)
- invoice_designer.compiler – design -> header/body/footer markup + stylesheet
- invoice_designer.generator – default designs from template feature flags
- invoice_designer.storage – file-backed template store
- invoice_designer.preview – wireframe thumbnails
"""


def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
        except OSError:
            content = ""
        for line in content.splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.1.0"
                return line.split("=")[1].strip().strip('"').strip("'")

    from importlib.metadata import PackageNotFoundError, version as pkg_version

    try:
        return pkg_version("invoice-designer")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()
__all__: list[str] = ["__version__"]
