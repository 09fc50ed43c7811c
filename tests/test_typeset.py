# test_typeset.py

import asyncio
import pytest
from unittest.mock import Mock

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from termline.session.state import RenderedView, Row, RowKind
from termline.transcript import classify_line
from termline.typeset import (
    QueuedTypesetter,
    UnicodeTypesetter,
    latex_to_unicode,
    make_typesetter,
    typeset_view,
)


def make_view(*lines):
    view = RenderedView()
    for line in lines:
        view.append(Row(RowKind.LINE, line=classify_line(line)))
    return view


class TestLatexToUnicode:

    @pytest.mark.parametrize("formula, expected", [
        ("x^2+y^2=z^2", "x²+y²=z²"),
        (r"\frac{1}{2}", "1/2"),
        (r"\frac{a+b}{c}", "(a+b)/c"),
        (r"\sqrt{x+1}", "√(x+1)"),
        (r"\alpha \leq \beta", "α ≤ β"),
        ("a_{10}", "a₁₀"),
        (r"e^{i\pi}", "e^(iπ)"),
        (r"\sum_{i=1}^{n} i", "∑ᵢ₌₁ⁿ i"),
        (r"\text{area} = \pi r^2", "area = π r²"),
    ])
    def test_conversion(self, formula, expected):
        assert latex_to_unicode(formula) == expected

    def test_unknown_command_is_kept(self):
        assert latex_to_unicode(r"\foo x") == r"\foo x"


class TestTypesetView:

    @pytest.mark.asyncio
    async def test_awaitable_engine(self):
        view = make_view("plain", "LATEX_DISPLAY:x^2")
        on_done = Mock()

        task = typeset_view(UnicodeTypesetter(), view, on_done=on_done)
        assert await task == 1
        await asyncio.sleep(0)

        assert view.rows[0].typeset is None
        assert view.rows[1].typeset == "x²"
        assert view.rows[1].text == "x²"
        on_done.assert_called_once()

    def test_queued_engine(self):
        engine = QueuedTypesetter()
        view = make_view("LATEX_INLINE:\\pi")

        assert typeset_view(engine, view) is None
        assert view.rows[0].typeset is None
        assert engine.drain() == 1
        assert view.rows[0].typeset == "π"
        assert not engine.queue

    @pytest.mark.parametrize("mode, engine_type", [
        ("unicode", UnicodeTypesetter),
        ("queued", QueuedTypesetter),
        ("off", type(None)),
    ])
    def test_make_typesetter(self, mode, engine_type):
        assert isinstance(make_typesetter(mode), engine_type)

    def test_no_engine_is_noop(self):
        view = make_view("LATEX_INLINE:x")
        assert typeset_view(None, view) is None

    def test_engine_without_known_shape_is_noop(self):
        view = make_view("LATEX_INLINE:x")
        assert typeset_view(object(), view) is None

    @pytest.mark.asyncio
    async def test_engine_failure_is_logged(self):
        class Broken:
            async def typeset_async(self, view):
                raise RuntimeError("boom")

        logger = Mock()
        on_done = Mock()
        task = typeset_view(Broken(), make_view("LATEX_INLINE:x"), logger=logger, on_done=on_done)
        with pytest.raises(RuntimeError):
            await task
        await asyncio.sleep(0)

        logger.error.assert_called_once()
        on_done.assert_not_called()

    def test_queue_failure_is_logged(self):
        engine = Mock(spec=["enqueue"])
        engine.enqueue.side_effect = RuntimeError("full")
        logger = Mock()

        typeset_view(engine, make_view("LATEX_INLINE:x"), logger=logger)

        logger.error.assert_called_once()
