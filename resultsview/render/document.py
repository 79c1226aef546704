"""
Document assembly: wraps a results fragment in a complete HTML page.

The page head carries the caller's state blob (JSON, quotes escaped for
attribute embedding), the page script tagged with a per-render nonce, and
the stylesheet. The fragment goes into the body unchanged.
"""

import itertools
import json
import logging
import os
import time
from typing import Any, Callable, Optional, Sequence

from jinja2 import Environment, FileSystemLoader

from ..assets import PAGE_SCRIPT, AssetResolver, FileAssetResolver
from ..config import ConfigurationProvider, DictConfiguration
from ..formatting import FieldFormatter, format_field_value
from ..models import StatementResult
from .dispatcher import ResultsDispatcher
from .styles import build_stylesheet


logger = logging.getLogger(__name__)

TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'templates')

_environment = Environment(loader=FileSystemLoader(TEMPLATE_DIR), autoescape=False)

_nonce_counter = itertools.count()


def serialize_state(state: Any) -> str:
    """Serialize the caller's state; None becomes an empty object."""
    return json.dumps(state if state is not None else {})


def escape_attribute(text: str) -> str:
    """Escape ampersands, then double quotes, so text can sit inside a "..." attribute."""
    return text.replace('&', '&amp;').replace('"', '&quot;')


def unescape_attribute(text: str) -> str:
    """Reverse escape_attribute()."""
    return text.replace('&quot;', '"').replace('&amp;', '&')


def make_nonce() -> str:
    """Timestamp-derived token, unique per call within the process."""
    return f"{time.time_ns()}{next(_nonce_counter)}"


def assemble_document(
    fragment: str,
    stylesheet: str,
    script_src: str,
    state: Any = None,
    nonce: Optional[str] = None,
) -> str:
    """
    Wrap a fragment in the results page template.

    Args:
        fragment: Rendered results, placed in the body as-is
        stylesheet: CSS rules for the <style> block
        script_src: URI of the page script
        state: Opaque, JSON-serializable state for the page script
        nonce: Token for the script and style tags; generated when omitted

    Returns:
        Complete HTML document
    """
    template = _environment.get_template('results.html')
    return template.render(
        state_attr=escape_attribute(serialize_state(state)),
        script_src=script_src,
        nonce=nonce or make_nonce(),
        stylesheet=stylesheet,
        fragment=fragment,
    )


class ResultsRenderer:
    """
    Turns a batch of statement results into a complete HTML document.

    Collaborators are injected:
    - formatter: field value formatter used for table cells
    - config: settings provider (reads prettyPrintJSONfields)
    - assets: resolves the page script URI
    - nonce_factory: produces the per-render nonce
    """

    def __init__(
        self,
        formatter: FieldFormatter = format_field_value,
        config: Optional[ConfigurationProvider] = None,
        assets: Optional[AssetResolver] = None,
        nonce_factory: Callable[[], str] = make_nonce,
        strict: bool = False,
    ):
        self.dispatcher = ResultsDispatcher(formatter, strict=strict)
        self.config = config if config is not None else DictConfiguration()
        self.assets = assets if assets is not None else FileAssetResolver()
        self.nonce_factory = nonce_factory

    def render(self, results: Sequence[StatementResult], state: Any = None) -> str:
        """
        Render results into a document.

        Args:
            results: Statement results, presented in order
            state: Opaque page state embedded in the document head

        Returns:
            HTML document string
        """
        fragment = self.dispatcher.render(results)
        nonce = self.nonce_factory()
        logger.debug("Assembling results document (nonce=%s)", nonce)
        return assemble_document(
            fragment,
            stylesheet=build_stylesheet(self.config),
            script_src=self.assets.resolve(PAGE_SCRIPT),
            state=state,
            nonce=nonce,
        )


def generate_results_html(
    results: Sequence[StatementResult],
    state: Any = None,
    config: Optional[ConfigurationProvider] = None,
    assets: Optional[AssetResolver] = None,
) -> str:
    """Render results with the default formatter."""
    return ResultsRenderer(config=config, assets=assets).render(results, state)
