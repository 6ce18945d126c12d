# -*- coding: utf-8 -*-
"""
Style Templates Module

Named presets for common use cases. A template is a plain option mapping
in the public API's key format; ``apply_template`` layers caller overrides
on top and the result feeds StylingOptions.from_dict.

Functions:
    list_templates: Names and descriptions of all templates
    get_template: Look up one template
    apply_template: Template options merged with overrides
    template_preview: Short summary of a template's settings
    recommend_templates: Templates suited to a content type
"""

import copy
from typing import Any, Dict, List, Mapping, Optional

from .errors import ConfigurationError


TEMPLATES: Dict[str, Dict[str, Any]] = {
    # Business & Professional
    'BUSINESS_CARD': {
        'name': 'Business Card',
        'description': 'Professional QR code for business cards',
        'customization': {
            'moduleSize': 8, 'margin': 4, 'errorCorrectionLevel': 'H',
            'foregroundColor': '#1a1a1a', 'backgroundColor': '#ffffff',
            'style': 'classy-rounded', 'frame': 'basic', 'frameColor': '#1a1a1a',
        },
    },
    'CORPORATE': {
        'name': 'Corporate',
        'description': 'Clean corporate style with subtle branding',
        'customization': {
            'moduleSize': 10, 'margin': 5, 'errorCorrectionLevel': 'M',
            'foregroundColor': '#003366', 'backgroundColor': '#ffffff',
            'style': 'square', 'frame': 'edge', 'frameColor': '#ffffff', 'frameTextColor': '#003366',
        },
    },

    # Marketing & Creative
    'VIBRANT': {
        'name': 'Vibrant',
        'description': 'Eye-catching design for marketing materials',
        'customization': {
            'moduleSize': 10, 'margin': 4, 'errorCorrectionLevel': 'M',
            'foregroundColor': '#C2410C', 'backgroundColor': '#FFF5E6',
            'style': 'dots', 'frame': 'banner', 'frameColor': '#FF6B35',
            'gradientType': 'linear-vertical', 'gradientColors': ['#C2410C', '#9D174D'],
        },
    },
    'GRADIENT_MODERN': {
        'name': 'Gradient Modern',
        'description': 'Modern gradient design for tech brands',
        'customization': {
            'moduleSize': 10, 'margin': 4, 'errorCorrectionLevel': 'M',
            'foregroundColor': '#4c1d95', 'backgroundColor': '#ffffff',
            'style': 'rounded', 'frame': 'none',
            'gradientType': 'radial', 'gradientColors': ['#3730a3', '#5b21b6'],
        },
    },
    'INSTAGRAM': {
        'name': 'Instagram',
        'description': 'Instagram-inspired gradient design',
        'customization': {
            'moduleSize': 10, 'margin': 4, 'errorCorrectionLevel': 'H',
            'foregroundColor': '#bc1888', 'backgroundColor': '#ffffff',
            'style': 'rounded', 'frame': 'circular', 'frameColor': '#ffffff',
            'gradientType': 'radial',
            'gradientColors': ['#a3520f', '#b03a1e', '#b01f33', '#a11a51', '#8f1267'],
        },
    },

    # Events & Utility
    'MINIMALIST': {
        'name': 'Minimalist',
        'description': 'Simple black and white design',
        'customization': {
            'moduleSize': 10, 'margin': 4, 'errorCorrectionLevel': 'M',
            'foregroundColor': '#000000', 'backgroundColor': '#ffffff',
            'style': 'square', 'frame': 'none',
        },
    },
    'EVENT': {
        'name': 'Event',
        'description': 'Event tickets and passes',
        'customization': {
            'moduleSize': 10, 'margin': 4, 'errorCorrectionLevel': 'H',
            'foregroundColor': '#111827', 'backgroundColor': '#ffffff',
            'style': 'dots', 'frame': 'banner',
            'frameColor': '#111827', 'frameText': 'Scan for Entry',
        },
    },
    'WIFI_SHARING': {
        'name': 'WiFi Sharing',
        'description': 'Easy WiFi network sharing',
        'customization': {
            'moduleSize': 10, 'margin': 4, 'errorCorrectionLevel': 'M',
            'foregroundColor': '#0f172a', 'backgroundColor': '#ffffff',
            'style': 'rounded', 'frame': 'basic', 'frameColor': '#0f172a',
            'frameText': 'Scan to Connect',
        },
    },
}

_RECOMMENDATIONS = {
    'url': ['GRADIENT_MODERN', 'VIBRANT', 'MINIMALIST'],
    'vcard': ['BUSINESS_CARD', 'CORPORATE', 'MINIMALIST'],
    'wifi': ['WIFI_SHARING', 'MINIMALIST'],
    'email': ['BUSINESS_CARD', 'CORPORATE'],
    'phone': ['BUSINESS_CARD', 'CORPORATE'],
    'event': ['EVENT', 'VIBRANT'],
    'social': ['INSTAGRAM', 'VIBRANT'],
}


def _key(name: str) -> str:
    return name.strip().upper().replace('-', '_').replace(' ', '_')


def list_templates() -> List[Dict[str, str]]:
    return [{'key': key, 'name': t['name'], 'description': t['description']}
            for key, t in TEMPLATES.items()]


def get_template(name: str) -> Dict[str, Any]:
    """
    Look up a template by key ('VIBRANT', 'gradient-modern', 'wifi sharing'...).

    Raises:
        ConfigurationError: If no template has that name
    """
    template = TEMPLATES.get(_key(name or ''))
    if template is None:
        raise ConfigurationError(
            f"Unknown template {name!r}. Available: {', '.join(TEMPLATES)}", field='template')
    return copy.deepcopy(template)


def apply_template(name: str, overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """
    Return the template's options with ``overrides`` applied on top.

    Example:
        >>> opts = apply_template('minimalist', {'frameText': 'Menu'})
        >>> opts['style'], opts['frameText']
        ('square', 'Menu')
    """
    options = get_template(name)['customization']
    options.update({k: v for k, v in (overrides or {}).items() if v is not None})
    return options


def template_preview(name: str) -> Dict[str, Any]:
    template = get_template(name)
    custom = template['customization']
    return {
        'name': template['name'],
        'description': template['description'],
        'settings': {
            'style': custom.get('style', 'square'),
            'colors': {
                'foreground': custom.get('foregroundColor'),
                'background': custom.get('backgroundColor'),
            },
            'hasGradient': custom.get('gradientType', 'none') != 'none',
            'hasFrame': custom.get('frame', 'none') != 'none',
            'errorCorrection': custom.get('errorCorrectionLevel'),
        },
    }


def recommend_templates(content_type: str) -> List[str]:
    """Template keys suited to a content type; generic picks for unknown types."""
    return list(_RECOMMENDATIONS.get((content_type or '').lower(), ['MINIMALIST', 'CORPORATE']))
