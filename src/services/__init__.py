"""Feature services: SBC parsing, explorer, price check, cost scenarios, chat."""

from src.services.chat import build_system_prompt, stream_chat_reply
from src.services.costs import (
    calculate_costs,
    calculate_scenario_costs,
    fallback_scenarios,
    generate_healthcare_scenarios,
)
from src.services.explorer import analyze_situation, generate_categories, generate_situations
from src.services.price_check import check_price
from src.services.sbc_parser import SBCParseError, parse_sbc

__all__ = [
    "SBCParseError",
    "analyze_situation",
    "build_system_prompt",
    "calculate_costs",
    "calculate_scenario_costs",
    "check_price",
    "fallback_scenarios",
    "generate_categories",
    "generate_healthcare_scenarios",
    "generate_situations",
    "parse_sbc",
    "stream_chat_reply",
]
