"""
Constants and Enums for UI Forge
================================

Centralized enums and shared constants for the generation and identity
layers.
"""

from enum import Enum
from types import MappingProxyType


class BaseEnum(str, Enum):
    """Base enum class with string values for consistent behavior."""

    def __str__(self):
        return self.value


# ===========================
# GENERATION ENUMS
# ===========================

class GenerationTask(BaseEnum):
    """Kinds of AI-backed generation requests."""
    ANALYZE_IMAGE = "analyze-image"
    GENERATE_PAGE = "generate-page"
    IMPROVE_CODE = "improve-code"
    ANALYZE_PERFORMANCE = "analyze-performance"
    ANALYZE_PATTERNS = "analyze-patterns"


class FileType(BaseEnum):
    """Kinds of files produced by page generation."""
    COMPONENT = "component"
    CONFIG = "config"


# ===========================
# PAGE TEMPLATES
# ===========================

PAGE_TEMPLATES = (
    {"id": "landing", "name": "Landing Page", "description": "Modern landing page with hero and features"},
    {"id": "dashboard", "name": "Dashboard", "description": "Admin dashboard with charts and tables"},
    {"id": "portfolio", "name": "Portfolio", "description": "Personal portfolio with projects showcase"},
    {"id": "blog", "name": "Blog", "description": "Blog layout with articles and sidebar"},
    {"id": "ecommerce", "name": "E-commerce", "description": "Product catalog with shopping cart"},
)

DEFAULT_TEMPLATE_ROUTES = MappingProxyType({
    "landing": ("/", "/about", "/contact"),
    "dashboard": ("/dashboard", "/analytics", "/settings"),
    "portfolio": ("/", "/projects", "/about", "/contact"),
    "blog": ("/", "/posts", "/categories", "/about"),
    "ecommerce": ("/", "/products", "/cart", "/checkout"),
})

DEFAULT_TEMPLATE = "landing"
DEFAULT_STYLE = "modern"


# ===========================
# LIMITS
# ===========================

MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10MB

# Per-component file generation is capped to bound external calls per request
MAX_COMPONENT_FILES = 3

BCRYPT_ROUNDS = 12

DEFAULT_MODEL_NAME = "gpt-4o-mini"
