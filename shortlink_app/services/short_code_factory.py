"""
Factory for creating short code generation strategies.
The random strategy is shared; custom-code strategies are per request.
"""

from enum import Enum
from typing import Optional

from shortlink_app.services.short_code_strategies import (
    ShortCodeStrategy,
    RandomShortCodeStrategy,
    CustomShortCodeStrategy
)
from shortlink_app.config import settings


class ShortCodeStrategyType(Enum):
    """Available short code generation strategies"""
    RANDOM = "random"
    CUSTOM = "custom"


class ShortCodeFactory:
    """Factory for short code strategies with a cached random generator"""
    
    _instances = {}  # Cache for stateless strategy instances
    
    @classmethod
    def create_strategy(cls, custom_code: Optional[str] = None) -> ShortCodeStrategy:
        """
        Pick the strategy for a creation request.
        
        Args:
            custom_code: Caller-supplied code, if any.
                         Empty strings count as absent.
        
        Returns:
            CustomShortCodeStrategy for a supplied code,
            otherwise the cached RandomShortCodeStrategy
        """
        if custom_code:
            return CustomShortCodeStrategy(custom_code)
        
        strategy_type = ShortCodeStrategyType.RANDOM
        if strategy_type not in cls._instances:
            cls._instances[strategy_type] = RandomShortCodeStrategy(
                length=settings.short_code_length
            )
        return cls._instances[strategy_type]
    
    @classmethod
    def clear_instances(cls):
        """Clear cached instances (for testing)"""
        cls._instances = {}


def generate(custom_code: Optional[str] = None) -> str:
    """
    Produce a short code for one request.
    
    Raises:
        ValidationError: INVALID_CUSTOM_CODE for a malformed custom code
    """
    return ShortCodeFactory.create_strategy(custom_code).generate()
