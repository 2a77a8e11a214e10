import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, cast

logger = logging.getLogger(__name__)


def load_json_fixture(fixture_name: str, fixtures_dir: Path) -> Dict[str, Any]:
    """
    Load a BOE API response fixture.

    Args:
        fixture_name: Name of the JSON file under fixtures/boe
        fixtures_dir: Path to the fixtures directory

    Returns:
        The decoded response, envelope included

    Raises:
        FileNotFoundError: If fixture doesn't exist
    """
    fixture_path = fixtures_dir / "boe" / fixture_name
    if not fixture_path.exists():
        raise FileNotFoundError(f"Fixture not found: {fixture_path}")
    logger.debug("Loading JSON from %s", fixture_path)
    return cast(Dict[str, Any], json.loads(fixture_path.read_text(encoding="utf-8")))


def article_node(
    number: str, entry_id: str, children: Optional[List[Dict[str, Any]]] = None
) -> Dict[str, Any]:
    """Index payload node for an article."""
    node: Dict[str, Any] = {
        "tipo": "articulo",
        "titulo": f"Artículo {number}",
        "id": entry_id,
    }
    if children is not None:
        node["items"] = children
    return node


def amendment(
    affected: Any,
    fecha: Any,
    referencia: Optional[str] = None,
    texto: Optional[str] = None,
) -> Dict[str, Any]:
    """Element of ``analisis.modificaciones``; None fields are left out."""
    item: Dict[str, Any] = {"afectado": affected, "fecha": fecha}
    if referencia is not None:
        item["referencia"] = referencia
    if texto is not None:
        item["texto"] = texto
    return item


def analysis_with(*amendments: Dict[str, Any]) -> Dict[str, Any]:
    """Analysis payload (without envelope) listing the given amendments."""
    return {"analisis": {"modificaciones": list(amendments)}}
