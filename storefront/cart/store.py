"""
Persistance du panier (collaborateur externe).
Contrat: load() une seule fois à l'initialisation, save(lines) à chaque mutation.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Protocol

logger = logging.getLogger(__name__)

# module storefront.cart.store
class CartStore(Protocol):
    def load(self) -> List[Dict[str, Any]]: ...
    def save(self, lines: List[Dict[str, Any]]) -> None: ...
    def clear(self) -> None: ...


class InMemoryCartStore:
    """Store volatile, utile pour les tests et les sessions serveur courtes."""

    def __init__(self, initial: Any = None):
        self._data = initial

    def load(self) -> List[Dict[str, Any]]:
        if not isinstance(self._data, list):
            self._data = None
            return []
        return list(self._data)

    def save(self, lines: List[Dict[str, Any]]) -> None:
        self._data = list(lines)

    def clear(self) -> None:
        self._data = None


class JsonFileCartStore:
    """
    Store fichier JSON (équivalent de la clé freshbox_cart du navigateur).
    - Un contenu corrompu ou qui n'est pas une liste est supprimé et le panier repart vide.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        try:
            parsed = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("cart.store failed to parse cart path=%s", self.path)
            return []
        if not isinstance(parsed, list):
            logger.warning("cart.store discarding non-list cart path=%s", self.path)
            self.clear()
            return []
        return parsed

    def save(self, lines: List[Dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(lines, ensure_ascii=False), encoding="utf-8")

    def clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
