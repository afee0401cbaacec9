from pathlib import Path

from .catalog import Catalog, standard_catalog
from .yaml_io import load_catalog_yaml


def _repo_root() -> Path:
    # src/brick_packer/api.py -> src -> repo root
    return Path(__file__).resolve().parents[2]


def catalogs_assets_dir() -> Path:
    return _repo_root() / "assets" / "catalogs"


def list_catalog_assets() -> list[str]:
    """File names of the catalogs bundled under assets/catalogs."""
    d = catalogs_assets_dir()
    if not d.is_dir():
        return []
    return sorted(p.name for p in d.glob("*.yaml") if p.is_file())


def resolve_catalog_asset(name: str) -> Path:
    """Path of a bundled catalog, by file name with or without `.yaml`.

    Names containing path separators or starting with a dot are rejected.
    """
    stem = str(name or "").strip()
    if not stem or stem.startswith(".") or "/" in stem or "\\" in stem:
        raise ValueError(f"Invalid catalog name: {name!r}")
    filename = stem if stem.lower().endswith(".yaml") else f"{stem}.yaml"

    path = catalogs_assets_dir() / filename
    if not path.is_file():
        available = ", ".join(list_catalog_assets()) or "none"
        raise FileNotFoundError(
            f"Catalog {stem!r} not found (bundled: {available})"
        )
    return path


def resolve_catalog(source: str | Path) -> Path:
    """An existing file wins; a bare name selects a bundled catalog."""
    path = Path(source)
    if path.is_file():
        return path
    if isinstance(source, Path) or path.name != str(source).strip():
        raise FileNotFoundError(f"Catalog not found: {source}")
    return resolve_catalog_asset(str(source))


def load_catalog(source: str | Path | None = None) -> Catalog:
    """Load a catalog file or bundled catalog, or the built-in standard
    catalog when `source` is None.

    The catalog must cover exactly the 125 cells of the cube.
    """
    if source is None:
        catalog = standard_catalog()
    else:
        catalog = load_catalog_yaml(resolve_catalog(source))
    catalog.check_volume()
    return catalog
