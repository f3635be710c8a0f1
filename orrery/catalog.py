#!/usr/bin/env python3
"""
Body catalog: the built-in solar system plus JSON catalog loading.

Schema
======
Catalog JSON (orrery/catalogs/*.json):
{
  "name": "Human-friendly catalog name",
  "central": {"name": "Sun", "diameter_km": 1392700, "color": [255, 215, 0]},
  "bodies": [
    {
      "name": "Earth",
      "color": [65, 105, 225],
      "orbit_radius": 149.6,           # or orbit_radius_x / orbit_radius_y
      "angular_speed": 29.78,
      "diameter_km": 12742,
      "phase": 2.0                     # optional, default 0
    }
  ]
}

Bodies keep the order in which they appear in the file; that order is the catalog order used
for illustrative ring ranks and hit-test tie-breaks.
"""
import json
import logging
import math
import os
from typing import List, Optional, Tuple

from .data_models import Body, Catalog, CentralBody, Color

logger = logging.getLogger(__name__)

CATALOGS_DIR = os.path.join(os.path.dirname(__file__), "catalogs")
DEFAULT_CATALOG_FILE = "solar_system.json"


class CatalogError(ValueError):
  """Raised when a catalog file cannot be used."""


def _read_json(path: str) -> dict:
  try:
    with open(path, "r", encoding="utf-8") as f:
      data = json.load(f)
  except OSError as exc:
    raise CatalogError(f"cannot read catalog {path}: {exc}") from exc
  except json.JSONDecodeError as exc:
    raise CatalogError(f"catalog {path} is not valid JSON: {exc}") from exc
  if not isinstance(data, dict):
    raise CatalogError(f"catalog {path} must contain a JSON object")
  return data


def _coerce_color(c: List[int], default: Color = (200, 200, 255)) -> Color:
  try:
    r, g, b = int(c[0]), int(c[1]), int(c[2])
  except (TypeError, ValueError, OverflowError, IndexError, KeyError):
    return default
  r = max(0, min(255, r)); g = max(0, min(255, g)); b = max(0, min(255, b))
  return (r, g, b)


def _finite(value, field: str) -> float:
  number = float(value)
  if not math.isfinite(number):
    raise ValueError(f"{field} must be finite, got {value!r}")
  return number


def _parse_body(entry: dict) -> Body:
  if not isinstance(entry, dict):
    raise TypeError(f"body entry must be an object, got {type(entry).__name__}")
  radius = entry.get("orbit_radius")
  radius_x = _finite(entry.get("orbit_radius_x", radius), "orbit_radius_x")
  radius_y = _finite(entry.get("orbit_radius_y", radius_x), "orbit_radius_y")
  body = Body(
    name=str(entry.get("name", "Body")),
    color=_coerce_color(entry.get("color", [200, 200, 255])),
    orbit_radius_x=radius_x,
    orbit_radius_y=radius_y,
    angular_speed=_finite(entry["angular_speed"], "angular_speed"),
    diameter_km=_finite(entry["diameter_km"], "diameter_km"),
    phase_offset=_finite(entry.get("phase", 0.0), "phase"),
  )
  if body.orbit_radius_x <= 0 or body.orbit_radius_y <= 0 or body.diameter_km <= 0:
    raise ValueError("orbit radii and diameter must be positive")
  return body


def parse_catalog(data: dict, default_name: str = "Catalog") -> Catalog:
  """Build a Catalog from decoded JSON, skipping malformed body entries."""
  if not isinstance(data, dict):
    raise CatalogError(f"catalog {default_name!r} must be a JSON object")
  central_data = data.get("central") or {}
  if not isinstance(central_data, dict):
    raise CatalogError("invalid central body: must be an object")
  try:
    central = CentralBody(
      name=str(central_data.get("name", "Sun")),
      color=_coerce_color(central_data.get("color", [255, 215, 0]), (255, 215, 0)),
      diameter_km=_finite(central_data["diameter_km"], "diameter_km"),
    )
  except (KeyError, TypeError, ValueError) as exc:
    raise CatalogError(f"invalid central body: {exc}") from exc
  if central.diameter_km <= 0:
    raise CatalogError(f"invalid central body: diameter_km must be positive, got {central.diameter_km}")

  entries = data.get("bodies")
  if not isinstance(entries, list):
    raise CatalogError(f"catalog {default_name!r} needs a 'bodies' list")
  bodies: List[Body] = []
  for i, entry in enumerate(entries):
    try:
      bodies.append(_parse_body(entry))
    except (KeyError, TypeError, ValueError) as exc:
      logger.warning("Skipping body #%d in catalog %r: %s", i, default_name, exc)
  if not bodies:
    raise CatalogError(f"catalog {default_name!r} has no valid bodies")
  return Catalog(name=str(data.get("name") or default_name), central=central, bodies=tuple(bodies))


def list_catalogs() -> List[Tuple[str, str]]:
  """Return list of (file_name, display_name) for bundled catalogs."""
  items: List[Tuple[str, str]] = []
  if not os.path.isdir(CATALOGS_DIR):
    return items
  for fn in sorted(os.listdir(CATALOGS_DIR)):
    if not fn.lower().endswith(".json"):
      continue
    try:
      data = _read_json(os.path.join(CATALOGS_DIR, fn))
    except CatalogError as exc:
      logger.warning("%s", exc)
      continue
    items.append((fn, data.get("name") or os.path.splitext(fn)[0]))
  return items


def load_catalog(path_or_name: str) -> Catalog:
  """
  Load a catalog from a path, or by file name from the bundled catalogs directory.
  """
  path = path_or_name
  if not os.path.isfile(path):
    path = os.path.join(CATALOGS_DIR, path_or_name)
  data = _read_json(path)
  catalog = parse_catalog(data, os.path.splitext(os.path.basename(path))[0])
  logger.info("Loaded catalog %r with %d bodies from %s", catalog.name, len(catalog.bodies), path)
  return catalog


def default_catalog() -> Catalog:
  """
  Sun + the eight planets.
  Distances in millions of km, angular speed is the mean orbital speed in km/s.
  """
  sun = CentralBody(name="Sun", color=(255, 215, 0), diameter_km=1392700)
  bodies = (
    Body("Mercury", (140, 140, 140), 57.9, 57.9, 47.87, 4879, 0),
    Body("Venus", (230, 230, 250), 108.2, 108.2, 35.02, 12104, 1),
    Body("Earth", (65, 105, 225), 149.6, 149.6, 29.78, 12742, 2),
    Body("Mars", (255, 69, 0), 227.9, 227.9, 24.07, 6779, 3),
    Body("Jupiter", (255, 165, 0), 778.5, 778.5, 13.07, 139820, 4),
    Body("Saturn", (244, 164, 96), 1434.0, 1434.0, 9.69, 116460, 5),
    Body("Uranus", (64, 224, 208), 2871.0, 2871.0, 6.81, 50724, 6),
    Body("Neptune", (65, 105, 225), 4495.0, 4495.0, 5.43, 49244, 7),
  )
  return Catalog(name="Solar System", central=sun, bodies=bodies)


def resolve_catalog(path_or_name: Optional[str]) -> Catalog:
  """Catalog selected on the command line, or the built-in one."""
  if not path_or_name:
    return default_catalog()
  return load_catalog(path_or_name)
