# typeset.py

"""
Math typesetting for rendered views.

Two engine shapes are supported, detected by probing for their methods:

- awaitable: ``engine.typeset_async(view)`` returns an awaitable that
  typesets the view's math rows.
- queued: ``engine.enqueue(view)`` records the view for later typesetting.

Typesetting is best effort. A missing engine is a no-op and engine errors
are logged, never raised into the reconciliation pass.
"""

import re
import asyncio
from collections import deque
from typing import Callable, Deque, Optional

GREEK = {
    'alpha': 'α', 'beta': 'β', 'gamma': 'γ', 'delta': 'δ', 'epsilon': 'ε',
    'varepsilon': 'ε', 'zeta': 'ζ', 'eta': 'η', 'theta': 'θ', 'iota': 'ι',
    'kappa': 'κ', 'lambda': 'λ', 'mu': 'μ', 'nu': 'ν', 'xi': 'ξ', 'pi': 'π',
    'rho': 'ρ', 'sigma': 'σ', 'tau': 'τ', 'phi': 'φ', 'varphi': 'φ',
    'chi': 'χ', 'psi': 'ψ', 'omega': 'ω',
    'Gamma': 'Γ', 'Delta': 'Δ', 'Theta': 'Θ', 'Lambda': 'Λ', 'Xi': 'Ξ',
    'Pi': 'Π', 'Sigma': 'Σ', 'Phi': 'Φ', 'Psi': 'Ψ', 'Omega': 'Ω',
}

SYMBOLS = {
    'times': '×', 'cdot': '·', 'div': '÷', 'pm': '±', 'mp': '∓',
    'leq': '≤', 'le': '≤', 'geq': '≥', 'ge': '≥', 'neq': '≠', 'ne': '≠',
    'approx': '≈', 'equiv': '≡', 'sim': '∼', 'infty': '∞', 'partial': '∂',
    'nabla': '∇', 'sum': '∑', 'prod': '∏', 'int': '∫', 'oint': '∮',
    'in': '∈', 'notin': '∉', 'subset': '⊂', 'subseteq': '⊆', 'cup': '∪',
    'cap': '∩', 'forall': '∀', 'exists': '∃', 'emptyset': '∅',
    'to': '→', 'rightarrow': '→', 'leftarrow': '←', 'Rightarrow': '⇒',
    'Leftrightarrow': '⇔', 'mapsto': '↦', 'ldots': '…', 'cdots': '⋯',
    'degree': '°', 'circ': '∘', 'sqrt': '√',
}

SUPERSCRIPTS = str.maketrans('0123456789+-=()ni', '⁰¹²³⁴⁵⁶⁷⁸⁹⁺⁻⁼⁽⁾ⁿⁱ')
SUBSCRIPTS = str.maketrans('0123456789+-=()aeoxij', '₀₁₂₃₄₅₆₇₈₉₊₋₌₍₎ₐₑₒₓᵢⱼ')
SUPERSCRIPT_CHARS = set('0123456789+-=()ni')
SUBSCRIPT_CHARS = set('0123456789+-=()aeoxij')

_GROUP = r'\{([^{}]*)\}'
_FRAC = re.compile(r'\\[dt]?frac' + _GROUP + _GROUP)
_SQRT = re.compile(r'\\sqrt' + _GROUP)
_SCRIPT = re.compile(r'([\^_])(?:' + _GROUP + r'|(\\?[A-Za-z0-9+\-=]))')
_COMMAND = re.compile(r'\\([A-Za-z]+)')
_SPACING = re.compile(r'\\[,;:! ]|\\(?:left|right|quad|qquad)(?![A-Za-z])')
_TEXT = re.compile(r'\\(?:text|mathrm|mathbf|mathit|operatorname)' + _GROUP)


def _wrap(expr: str) -> str:
    expr = expr.strip()
    return expr if len(expr) <= 1 or expr.isalnum() else f"({expr})"


def _script(match) -> str:
    marker = match.group(1)
    body = match.group(2) if match.group(2) is not None else match.group(3)
    chars, table = (SUPERSCRIPT_CHARS, SUPERSCRIPTS) if marker == '^' else (SUBSCRIPT_CHARS, SUBSCRIPTS)
    if body and set(body) <= chars:
        return body.translate(table)
    body = body.strip()
    return f"{marker}{body}" if len(body) <= 1 else f"{marker}({body})"


def _command(match) -> str:
    name = match.group(1)
    return GREEK.get(name) or SYMBOLS.get(name) or match.group(0)


def latex_to_unicode(formula: str) -> str:
    """Approximate a LaTeX formula with plain Unicode text."""
    text = _SPACING.sub(' ', formula)
    text = _TEXT.sub(r'\1', text)
    # Innermost groups first so nested fractions and roots resolve
    for _ in range(8):
        previous = text
        text = _FRAC.sub(lambda m: f"{_wrap(m.group(1))}/{_wrap(m.group(2))}", text)
        text = _SQRT.sub(lambda m: f"√{_wrap(m.group(1))}", text)
        if text == previous:
            break
    text = _COMMAND.sub(_command, text)
    text = _SCRIPT.sub(_script, text)
    text = text.replace('{', '').replace('}', '')
    return re.sub(r'\s+', ' ', text).strip()


def _typeset_rows(view) -> int:
    count = 0
    for row in view.rows:
        if row.is_math:
            row.typeset = latex_to_unicode(row.line.text)
            count += 1
    return count


class UnicodeTypesetter:
    """Awaitable engine: rewrites math rows as Unicode text."""

    async def typeset_async(self, view) -> int:
        count = _typeset_rows(view)
        await asyncio.sleep(0)
        return count


class QueuedTypesetter:
    """
    Queue engine: views are collected by enqueue() and typeset by drain().

    Display drains the queue at the start of every repaint, so queued views
    are typeset in the same pass that draws them.
    """

    def __init__(self):
        self.queue: Deque = deque()

    def enqueue(self, view) -> None:
        self.queue.append(view)

    def drain(self) -> int:
        count = 0
        while self.queue:
            count += _typeset_rows(self.queue.popleft())
        return count


def make_typesetter(mode: str):
    """Engine for a `math` config mode; None when math is shown as raw markup."""
    if mode == "unicode":
        return UnicodeTypesetter()
    if mode == "queued":
        return QueuedTypesetter()
    return None


def typeset_view(engine, view, logger=None,
                 on_done: Optional[Callable[[], None]] = None) -> Optional[asyncio.Task]:
    """
    Hand `view` to whichever engine shape `engine` supports.

    Returns the scheduled task for awaitable engines, None otherwise.
    `on_done` is called once the awaitable engine finishes successfully.
    """
    if engine is None:
        return None

    typeset_async = getattr(engine, 'typeset_async', None)
    if callable(typeset_async):
        task = asyncio.ensure_future(typeset_async(view))

        def _finished(t: asyncio.Task) -> None:
            if t.cancelled():
                return
            error = t.exception()
            if error is not None:
                if logger:
                    logger.error(f"Math typesetting error: {error}")
                return
            if on_done:
                on_done()

        task.add_done_callback(_finished)
        return task

    enqueue = getattr(engine, 'enqueue', None)
    if callable(enqueue):
        try:
            enqueue(view)
        except Exception as e:
            if logger:
                logger.error(f"Math typesetting queue error: {e}")
    return None
