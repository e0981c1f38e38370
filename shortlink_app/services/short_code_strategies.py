"""
Short code generation strategies for the link registry.
Uses Strategy Pattern so caller-supplied and random codes share one interface.
"""

import random
import re
import string
from abc import ABC, abstractmethod

from shortlink_app.exceptions import ValidationError, ValidationErrorKind


CUSTOM_CODE_PATTERN = re.compile(r"^[A-Za-z0-9]{3,20}$")


def is_valid_custom_code(code: str) -> bool:
    """Custom codes are 3-20 ASCII letters or digits"""
    return bool(CUSTOM_CODE_PATTERN.fullmatch(code))


class ShortCodeStrategy(ABC):
    """Abstract base class for short code generation strategies"""
    
    # Strategies that return the same code every time must not be retried
    retryable = False
    
    @abstractmethod
    def generate(self) -> str:
        """
        Produce a short code.
        
        Uniqueness against existing links is checked by the registry,
        not here.
        
        Returns:
            A short code string
        
        Raises:
            ValidationError: If the code cannot be produced
        """
        pass


class RandomShortCodeStrategy(ShortCodeStrategy):
    """
    Random generation strategy.
    Each character is drawn independently and uniformly from [A-Za-z0-9].
    
    Pros: Simple, unpredictable
    Cons: Collision risk, so the registry retries on a clash
    """
    
    retryable = True
    
    def __init__(self, length: int = 6, rng: random.Random = None):
        self.length = length
        self.characters = string.ascii_letters + string.digits
        self.rng = rng or random.SystemRandom()
    
    def generate(self) -> str:
        """Generate a random string of the configured length"""
        return ''.join(self.rng.choice(self.characters) for _ in range(self.length))


class CustomShortCodeStrategy(ShortCodeStrategy):
    """
    Caller-chosen code.
    Validated once; a clash is reported immediately instead of retried.
    """
    
    def __init__(self, custom_code: str):
        self.custom_code = custom_code
    
    def generate(self) -> str:
        if not is_valid_custom_code(self.custom_code):
            raise ValidationError(
                ValidationErrorKind.INVALID_CUSTOM_CODE,
                f"Invalid custom code: {self.custom_code}. "
                f"Must be 3-20 alphanumeric characters."
            )
        return self.custom_code
