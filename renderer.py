"""Jinja2 rendering of the auto-submitting checkout form."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional, Union

from jinja2 import ChoiceLoader, DictLoader, Environment, FileSystemLoader, select_autoescape

from payment_gateway import FormPayload

DEFAULT_TEMPLATE = "checkout_form.html"

CHECKOUT_FORM_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>{{ page_title }}</title>
</head>
<body onload="document.forms['checkout_form'].submit()">
    <p>{{ page_title }}</p>
    <form name="checkout_form" action="{{ gateway_url }}" method="post">
        <input type="hidden" name="encrypted_request" value="{{ encrypted_request }}">
        <input type="hidden" name="merchant_id" value="{{ merchant_id }}">
        <input type="hidden" name="access_token" value="{{ access_token }}">
        <noscript><button type="submit">Continue to payment</button></noscript>
    </form>
</body>
</html>
"""


class FormRenderer:
    """Render templates by name.

    The built-in ``checkout_form.html`` is always available. Templates in
    ``template_dir`` take precedence over it.
    """

    def __init__(self, template_dir: Optional[Union[str, Path]] = None):
        loaders = [DictLoader({DEFAULT_TEMPLATE: CHECKOUT_FORM_TEMPLATE})]
        if template_dir is not None:
            loaders.insert(0, FileSystemLoader(str(template_dir)))
        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(default=True),
        )

    def render(self, template_name: str, parameters: Optional[Mapping[str, Any]] = None) -> str:
        return self.env.get_template(template_name).render(**dict(parameters or {}))


def render_form(payload: FormPayload, renderer: Optional[FormRenderer] = None) -> str:
    """Render the default auto-submit form for ``payload``."""
    renderer = renderer or FormRenderer()
    return renderer.render(DEFAULT_TEMPLATE, payload.as_dict())


__all__ = ["CHECKOUT_FORM_TEMPLATE", "DEFAULT_TEMPLATE", "FormRenderer", "render_form"]
