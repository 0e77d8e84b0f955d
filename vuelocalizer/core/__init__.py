"""
Core module for VueLocalizer
============================
"""

from .accumulator import TranslationAccumulator
from .classifier import contains_chinese, is_localizable
from .keys import key_for
from .localizers import AttributeLocalizer, InterpolationLocalizer
from .markup import Comment, Element, Text, parse_markup
from .sfc_parser import ComponentDescriptor, parse_component
from .template_walker import TemplateWalker, localize_template
from .output_formatter import ComponentOutputFormatter

__all__ = [
    'TranslationAccumulator',
    'contains_chinese', 'is_localizable', 'key_for',
    'AttributeLocalizer', 'InterpolationLocalizer',
    'Comment', 'Element', 'Text', 'parse_markup',
    'ComponentDescriptor', 'parse_component',
    'TemplateWalker', 'localize_template',
    'ComponentOutputFormatter',
]
