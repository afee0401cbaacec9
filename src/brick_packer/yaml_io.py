from pathlib import Path

import yaml

from .catalog import Catalog, orientations
from .types import BrickClass, Dims


def _coerce_int(value: object, *, label: str) -> int:
    if isinstance(value, bool):
        raise TypeError(f"{label} must be an int, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise ValueError(f"{label} invalid integer string: {value!r}") from None
    raise TypeError(f"{label} must be an int, got {type(value).__name__}")


def _coerce_dims(values: object, *, label: str) -> Dims:
    if not isinstance(values, (list, tuple)):
        raise TypeError(f"{label} must be a list")
    if len(values) != 3:
        raise ValueError(f"{label} must have length 3")
    out = [_coerce_int(v, label=f"{label}[{i}]") for i, v in enumerate(values)]
    for i, v in enumerate(out):
        if v <= 0:
            raise ValueError(f"{label}[{i}] must be > 0, got {v}")
    return (out[0], out[1], out[2])


def load_catalog_yaml(path: str | Path) -> Catalog:
    """Load an ordered brick catalog from a YAML file."""
    path = Path(path)
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    return catalog_from_document(raw)


def catalog_from_document(raw: object) -> Catalog:
    if not isinstance(raw, dict):
        raise ValueError("YAML root must be a mapping")

    bricks_node = raw.get("bricks")
    if not isinstance(bricks_node, list) or not bricks_node:
        raise ValueError("YAML must contain a non-empty list 'bricks'")

    items: list[tuple[BrickClass, int]] = []
    for idx, item in enumerate(bricks_node):
        if not isinstance(item, dict):
            raise ValueError(f"bricks[{idx}] must be a mapping")
        name = item.get("name")
        if not isinstance(name, str) or not name:
            raise ValueError(f"bricks[{idx}].name must be a non-empty string")
        dims = _coerce_dims(item.get("dims"), label=f"bricks[{idx}].dims")
        count = _coerce_int(item.get("count", 1), label=f"bricks[{idx}].count")
        if count < 0:
            raise ValueError(f"bricks[{idx}].count must be >= 0")

        variants_node = item.get("variants")
        if variants_node is None:
            variants = orientations(dims)
        else:
            if not isinstance(variants_node, list) or not variants_node:
                raise ValueError(f"bricks[{idx}].variants must be a non-empty list")
            variants = tuple(
                _coerce_dims(v, label=f"bricks[{idx}].variants[{j}]")
                for j, v in enumerate(variants_node)
            )
        items.append((BrickClass(name, variants), count))

    return Catalog.from_counts(items)


def dump_catalog_yaml(catalog: Catalog) -> str:
    """Construct a YAML document (as string) from a catalog."""
    bricks = []
    for brick, count in catalog.groups():
        node: dict[str, object] = {
            "name": brick.name,
            "dims": list(brick.variants[0]),
            "count": count,
        }
        if brick.variants != orientations(brick.variants[0]):
            node["variants"] = [list(v) for v in brick.variants]
        bricks.append(node)
    doc = {"version": 1, "bricks": bricks}
    return yaml.safe_dump(doc, sort_keys=False, default_flow_style=None)


def write_catalog_yaml(
    path: str | Path, catalog: Catalog, *, overwrite: bool = False
) -> None:
    p = Path(path)
    if p.exists() and not overwrite:
        raise FileExistsError(f"Refusing to overwrite existing file: {p}")
    p.write_text(dump_catalog_yaml(catalog), encoding="utf-8")
