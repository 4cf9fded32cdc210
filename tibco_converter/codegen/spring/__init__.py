"""
Spring Boot generators.
"""

from .controller import ControllerGenerator
from .dto import DtoGenerator
from .endpoints import Endpoint, synthesize_endpoints

__all__ = ["ControllerGenerator", "DtoGenerator", "Endpoint", "synthesize_endpoints"]
