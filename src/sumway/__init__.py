"""Top-level package for Sumway.

Provides subpackages:
- sumway.core – immutable data models, validation and serialization
- sumway.engine – sum generation, decomposition search and balanced selection
- sumway.gradebook – hierarchy/roster controller with explicit invalidation
- sumway.storage – locked JSON persistence
- sumway.output – CSV and PDF exports
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.1.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    # Fallback to importlib.metadata for installed package
    try:
        from importlib.metadata import version as pkg_version
        return pkg_version("sumway")
    except Exception:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
