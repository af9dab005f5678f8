"""
Suggestion gateway — insights and placement suggestions from a TextGenerator.

The generator's answer is untrusted: it is parsed as JSON and checked
against the expected shape. Any failure (generator exception, invalid
JSON, wrong shape) is logged and degrades to an empty list. Nothing
here writes to the store.

Usage:
    from smartstock.services.suggestions import request_insights

    insights = request_insights(generator, snapshot)
    for insight in insights:
        print(insight.title, insight.description)
"""

import json
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping

from smartstock.exceptions import WarehouseError
from smartstock.protocols.generator import TextGenerator
from smartstock.services.projection import EMPTY_LABEL, MISSING_LABEL, Snapshot

logger = logging.getLogger('smartstock')


INSIGHT_SCHEMA = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "title": {"type": "string"},
            "description": {"type": "string"},
        },
        "required": ["title", "description"],
    },
}

PLACEMENT_SCHEMA = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "locationCode": {"type": "string"},
            "reason": {"type": "string"},
            "score": {"type": "number"},
        },
        "required": ["locationCode", "reason", "score"],
    },
}


@dataclass(frozen=True)
class Insight:
    title: str
    description: str


@dataclass(frozen=True)
class PlacementSuggestion:
    location_code: str
    reason: str
    score: float  # 0-100 by contract, not range-checked


# ══════════════════════════════════════════════════════════════
# PAYLOADS & PROMPTS
# ══════════════════════════════════════════════════════════════


def _number(value: Decimal) -> int | float:
    """Decimal → JSON number (integral values without a fraction)."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def insight_payload(snapshot: Snapshot) -> list[dict[str, Any]]:
    """One entry per location: code, occupying product, quantity, threshold."""
    payload = []
    for location in snapshot.locations:
        product = snapshot.product(location.product_id)
        payload.append({
            'location': location.code,
            'product': product.name if product else EMPTY_LABEL,
            'sku': product.sku if product else MISSING_LABEL,
            'qty': _number(location.quantity),
            'minStock': _number(product.min_stock) if product else 0,
        })
    return payload


def placement_payload(snapshot: Snapshot) -> dict[str, list[dict[str, Any]]]:
    """Empty locations plus the category/type map of occupied ones."""
    empty = [
        {'code': l.code, 'type': l.type.value}
        for l in snapshot.empty_locations()
    ]
    occupied = []
    for location in snapshot.locations:
        if location.is_empty:
            continue
        product = snapshot.product(location.product_id)
        occupied.append({
            'code': location.code,
            'category': product.category if product else None,
            'type': location.type.value,
        })
    return {'empty': empty, 'occupied': occupied}


def insight_prompt(snapshot: Snapshot) -> str:
    summary = json.dumps(insight_payload(snapshot), ensure_ascii=False)
    return (
        "Analise este resumo de inventário de um armazém e forneça de 3 a 5 "
        "insights estratégicos em português:\n"
        f"{summary}\n\n"
        "Foque em:\n"
        "1. Itens com estoque abaixo do mínimo.\n"
        "2. Otimização de espaço (endereços vazios ou superlotados).\n"
        "3. Reabastecimento das posições de picking.\n\n"
        "Retorne um array JSON de objetos com as chaves 'title' e 'description'."
    )


def placement_prompt(product: Mapping[str, Any], snapshot: Snapshot) -> str:
    payload = placement_payload(snapshot)
    return (
        "Sugira os melhores endereços para o seguinte produto novo:\n"
        f"Produto: {product['name']} (Categoria: {product['category']})\n\n"
        f"Endereços vazios disponíveis: {json.dumps(payload['empty'], ensure_ascii=False)}\n"
        f"Mapa de endereços ocupados: {json.dumps(payload['occupied'], ensure_ascii=False)}\n\n"
        "Critérios:\n"
        "1. Agrupar por categoria semelhante.\n"
        "2. Preferir PICKING para itens de alta rotatividade.\n"
        "3. Manter a organização lógica dos corredores.\n\n"
        "Retorne um array JSON com no máximo 3 sugestões, cada uma com "
        "'locationCode', 'reason' e 'score' (0-100). Em português."
    )


# ══════════════════════════════════════════════════════════════
# RESPONSE PARSING
# ══════════════════════════════════════════════════════════════


def _load_array(text: str | None) -> list | None:
    try:
        data = json.loads((text or '').strip() or '[]')
    except ValueError:
        return None
    return data if isinstance(data, list) else None


def parse_insights(text: str | None) -> list[Insight]:
    """Parse a generator answer; [] unless every item is {title, description}."""
    items = _load_array(text)
    if items is None:
        return []

    insights = []
    for item in items:
        if not isinstance(item, dict):
            return []
        title, description = item.get('title'), item.get('description')
        if not isinstance(title, str) or not isinstance(description, str):
            return []
        insights.append(Insight(title=title, description=description))
    return insights


def parse_placements(text: str | None) -> list[PlacementSuggestion]:
    """Parse a generator answer; [] unless every item is {locationCode, reason, score}."""
    items = _load_array(text)
    if items is None:
        return []

    suggestions = []
    for item in items:
        if not isinstance(item, dict):
            return []
        code, reason, score = item.get('locationCode'), item.get('reason'), item.get('score')
        if not isinstance(code, str) or not isinstance(reason, str):
            return []
        if isinstance(score, bool) or not isinstance(score, (int, float)):
            return []
        suggestions.append(PlacementSuggestion(location_code=code, reason=reason, score=float(score)))
    return suggestions


# ══════════════════════════════════════════════════════════════
# REQUESTS
# ══════════════════════════════════════════════════════════════


def _generate(generator: TextGenerator, prompt: str, schema: dict, kind: str) -> str | None:
    try:
        return generator.generate(prompt, schema)
    except Exception:
        # Any backend failure degrades to an empty suggestion list
        logger.warning("warehouse.suggestions.failed", extra={"kind": kind}, exc_info=True)
        return None


def request_insights(generator: TextGenerator, snapshot: Snapshot) -> list[Insight]:
    """3 to 5 findings about low stock, space use and replenishment."""
    text = _generate(generator, insight_prompt(snapshot), INSIGHT_SCHEMA, 'insights')
    return parse_insights(text)


def request_placements(generator: TextGenerator, product: Mapping[str, Any],
                       snapshot: Snapshot) -> list[PlacementSuggestion]:
    """
    Ranked location suggestions for a new product.

    Raises:
        WarehouseError('NAME_REQUIRED'): If product has no name
        WarehouseError('CATEGORY_REQUIRED'): If product has no category
    """
    name = str(product.get('name') or '').strip()
    category = str(product.get('category') or '').strip()
    if not name:
        raise WarehouseError('NAME_REQUIRED')
    if not category:
        raise WarehouseError('CATEGORY_REQUIRED')

    prompt = placement_prompt({'name': name, 'category': category}, snapshot)
    text = _generate(generator, prompt, PLACEMENT_SCHEMA, 'placements')
    return parse_placements(text)
