"""Canned content served by the mock endpoints.

Everything here is fabricated demo data; nothing is read from or written to a store.
"""

from __future__ import annotations

import random
from typing import Final, Literal

SubscriptionTier = Literal["free", "premium", "pro"]

DEFAULT_TIER: Final[SubscriptionTier] = "free"

DAILY_QUOTAS: Final[dict[str, int]] = {
    "free": 5,
    "premium": 100,
    "pro": 500,
}

DEMO_EMAIL: Final[str] = "demo@aissist.com"
DEMO_CREATED_AT: Final[str] = "2026-02-18T00:00:00Z"

# Snapshot of the "logged in" demo account.
LOGIN_TIER: Final[SubscriptionTier] = "premium"
LOGIN_REMAINING_QUERIES: Final[int] = 95
DEMO_TOTAL_QUERIES: Final[int] = 5
USAGE_TODAY_QUERIES: Final[int] = 3
CHAT_QUERIES_REMAINING: Final[int] = 96

SIGNUP_MESSAGE: Final[str] = "Conta criada com sucesso! Bem-vindo ao AIssist."
LOGIN_MESSAGE: Final[str] = "Login realizado com sucesso!"

CHAT_TEMPLATES: Final[tuple[str, ...]] = (
    'Baseado na sua pergunta sobre "{message}", posso sugerir alguns filmes interessantes...',
    'Interessante! Sobre "{message}", aqui estão algumas recomendações...',
    'Entendi sua busca por "{message}". Vou analisar e sugerir...',
    'Sobre "{message}" - deixe-me buscar as melhores opções para você...',
)

RECOMMENDATIONS: Final[tuple[dict[str, object], ...]] = (
    {"title": "Filme Exemplo 1", "rating": 8.5, "year": 2023},
    {"title": "Série Exemplo 2", "rating": 9.1, "year": 2024},
    {"title": "Documentário 3", "rating": 7.8, "year": 2022},
)

POPULAR_MOVIES: Final[tuple[dict[str, object], ...]] = (
    {"id": 1, "title": "Demo Movie 1", "rating": 8.5},
    {"id": 2, "title": "Demo Movie 2", "rating": 7.8},
)

SEARCH_RATING: Final[float] = 8.0


def quota_for_tier(tier: str | None) -> int:
    """Daily query quota for a plan; unknown or missing plans get the free quota."""

    return DAILY_QUOTAS.get(tier or DEFAULT_TIER, DAILY_QUOTAS[DEFAULT_TIER])


def pick_chat_reply(message: str, rng: random.Random | None = None) -> str:
    chooser = rng or random
    return chooser.choice(CHAT_TEMPLATES).format(message=message)


def simulated_processing_ms(rng: random.Random | None = None) -> int:
    chooser = rng or random
    return chooser.randrange(500, 2500)


def search_results(query: str) -> list[dict[str, object]]:
    text = query.strip()
    if not text:
        return []
    return [{"id": 1, "title": f"Resultado para: {text}", "rating": SEARCH_RATING}]
