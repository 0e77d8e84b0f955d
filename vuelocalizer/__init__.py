"""
VueLocalizer - i18n extraction for Vue single file components
=============================================================

Scans a source tree for ``.vue`` files and:
- replaces Chinese template text with ``$t('<key>')`` calls
- binds ``title``/``placeholder`` attributes to translation calls
- rewrites Chinese string literals inside ``{{ }}`` expressions
- writes ``lang/zh.js`` and ``lang/en.js`` tables seeded with the source text

Non-component files are copied unchanged.
"""

__version__ = "1.0.0"
