"""
envgen: generate a runtime .env file from a key template.

Only keys listed in the template and defined in the process
environment are written, in template order.
"""

__version__ = "0.1.0"

from .services.exporter import TemplateExporter, generate, generate_and_report

__all__ = [
    "TemplateExporter",
    "generate",
    "generate_and_report",
    "__version__",
]
