"""
Logique panier pure (pas de Stripe, pas de réseau).
Les prix arrivent déjà en centimes depuis le front: aucune multiplication par 100 ici.
"""
import json
import math
import re
from typing import List, Dict, Any
from fastapi import HTTPException

from storefront.config import CHECKOUT_CURRENCY

# Montant minimal accepté par Stripe pour une ligne (en centimes)
MIN_UNIT_AMOUNT = 50

# Chaînes numériques reconnues (décimal, exposant, Infinity, 0x/0o/0b)
_DECIMAL_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$", re.ASCII)
_INFINITY_RE = re.compile(r"^([+-]?)Infinity$")
_PREFIXED_RE = re.compile(r"^0([xXoObB])([0-9a-fA-F]+)$")
_PREFIX_BASES = {"x": 16, "o": 8, "b": 2}

def _reject_constant(token: str):
    raise ValueError(f"invalid JSON constant {token}")

def loads_json(raw: Any) -> Any:
    """json.loads strict: NaN, Infinity et -Infinity ne sont pas du JSON."""
    return json.loads(raw, parse_constant=_reject_constant)

# module storefront.payments.cart
def parse_items_payload(raw: Any) -> List[Any]:
    """
    Décode le champ 'items' du formulaire (chaîne JSON) en liste d'articles.
    - Soulève HTTPException(400) si le champ est absent, non JSON, vide ou n'est pas une liste.
    - Accepte aussi une liste déjà décodée (corps JSON de l'API).
    """
    if raw is None or raw == "":
        raise HTTPException(status_code=400, detail="No items submitted.")
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="replace")
    if isinstance(raw, str):
        try:
            items = loads_json(raw)
        except ValueError:
            raise HTTPException(status_code=400, detail="Items payload is not valid JSON.")
    else:
        items = raw
    if not isinstance(items, list) or not items:
        raise HTTPException(status_code=400, detail="Your cart is empty.")
    return items

def _int_to_float(value: int) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf

def _str_to_number(text: str) -> float:
    text = text.strip()
    if not text:
        return 0.0
    if _DECIMAL_RE.match(text):
        return float(text)
    m = _INFINITY_RE.match(text)
    if m:
        return -math.inf if m.group(1) == "-" else math.inf
    m = _PREFIXED_RE.match(text)
    if m:
        try:
            return _int_to_float(int(m.group(2), _PREFIX_BASES[m.group(1).lower()]))
        except ValueError:
            return math.nan
    return math.nan

def _to_number(value: Any) -> float:
    # NaN pour tout ce qui n'est pas un nombre exploitable
    if value is None or isinstance(value, bool):
        return math.nan
    if isinstance(value, int):
        return _int_to_float(value)
    if isinstance(value, float):
        return value
    if isinstance(value, str):
        return _str_to_number(value)
    return math.nan

def item_name(item: Dict[str, Any], index: int) -> str:
    """Nom affiché: le nom fourni (nettoyé) ou 'Item N' (position 1-based)."""
    name = item.get("name")
    if isinstance(name, str) and name.strip():
        return name.strip()
    return f"Item {index + 1}"

def unit_amount_from_item(item: Dict[str, Any], name: str) -> int:
    """
    Prix unitaire en centimes, arrondi à l'entier le plus proche.
    - Soulève HTTPException(400) si le prix n'est pas fini ou < MIN_UNIT_AMOUNT.
    """
    price = _to_number(item.get("price"))
    if not math.isfinite(price):
        raise HTTPException(status_code=400, detail=f'Price for "{name}" must be valid (>= {MIN_UNIT_AMOUNT} cents).')
    unit_amount = math.floor(price + 0.5)
    if unit_amount < MIN_UNIT_AMOUNT:
        raise HTTPException(status_code=400, detail=f'Price for "{name}" must be valid (>= {MIN_UNIT_AMOUNT} cents).')
    return unit_amount

def quantity_from_item(item: Dict[str, Any]) -> int:
    """Quantité entière >= 1 (défaut 1, arrondie vers le bas)."""
    raw = item.get("quantity")
    qty = _to_number(1 if raw is None else raw)
    if not math.isfinite(qty):
        return 1
    return max(1, math.floor(qty))

def images_from_item(item: Dict[str, Any]) -> List[Any]:
    images = item.get("images")
    if not isinstance(images, list):
        return []
    return [url for url in images if url]

def normalize_item(item: Any, index: int) -> Dict[str, Any]:
    """
    Construit une ligne Stripe 'price_data' à partir d'un article du panier.
    - item: {name, price (centimes), quantity?, images?}; tout autre type est traité comme {}.
    - index: position dans le panier (pour le nom de repli).
    """
    if not isinstance(item, dict):
        item = {}
    name = item_name(item, index)
    unit_amount = unit_amount_from_item(item, name)
    return {
        "price_data": {
            "currency": CHECKOUT_CURRENCY,
            "product_data": {"name": name, "images": images_from_item(item)},
            "unit_amount": unit_amount,
        },
        "quantity": quantity_from_item(item),
    }

def to_line_items(items: List[Any]) -> List[Dict[str, Any]]:
    """
    Construit les line_items Stripe pour tout le panier.
    Le premier article invalide fait échouer tout le panier (pas de résultat partiel).
    """
    return [normalize_item(it, i) for i, it in enumerate(items)]

def cart_total(line_items: List[Dict[str, Any]]) -> int:
    """Total du panier en centimes (utile pour les logs)."""
    return sum(li["price_data"]["unit_amount"] * li["quantity"] for li in line_items)
