"""
Constrained random password generator.
"""

from .charsets import CharacterClass, build_alphabet
from .password_generator import (
    ConfigurationError,
    GenerationFailed,
    PasswordGenerator,
    generate,
)

__all__ = [
    'CharacterClass',
    'ConfigurationError',
    'GenerationFailed',
    'PasswordGenerator',
    'build_alphabet',
    'generate',
]
