"""
Calculator Engine for TapCalc
Turns single key commands into a displayed value and chains binary operations
"""
import logging
import math
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum

import config
from input_buffer import InputBuffer

logger = logging.getLogger(__name__)


class Operator(Enum):
    ADD = "+"
    SUB = "−"
    MUL = "×"
    DIV = "÷"
    EQUALS = "="


# Keyboard-friendly spellings of the operator keys
OPERATOR_ALIASES = {
    "-": Operator.SUB,
    "*": Operator.MUL,
    "x": Operator.MUL,
    "/": Operator.DIV,
}

MEMORY_COMMANDS = ("MC", "MR", "M+", "M-")


class EntryState(Enum):
    IDLE = "idle"            # just cleared
    ENTERING = "entering"    # typing a number into the buffer
    RESULT = "result"        # showing a computed value


def parse_operator(op):
    """Return the Operator for a key symbol, or None if it is not one"""
    if isinstance(op, Operator):
        return op
    if not isinstance(op, str):
        return None
    try:
        return Operator(op)
    except ValueError:
        return OPERATOR_ALIASES.get(op)


def apply_operator(op, left, right):
    """Binary arithmetic with IEEE-754 results for division by zero"""
    if op is Operator.ADD:
        return left + right
    if op is Operator.SUB:
        return left - right
    if op is Operator.MUL:
        return left * right
    if op is Operator.DIV:
        if right == 0:
            if left == 0 or math.isnan(left):
                return math.nan
            return math.copysign(math.inf, left) * math.copysign(1.0, right)
        return left / right
    raise ValueError(f"Not a binary operator: {op}")


def format_number(value):
    """Shortest decimal text of a float: no exponent, no trailing '.0'"""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    text = repr(float(value))
    if "e" in text:
        text = format(Decimal(text), "f")
    if text.endswith(".0"):
        text = text[:-2]
    return text


def count_digits(text):
    """(integer digits, all digits) of an unsigned number string"""
    point = text.find(".")
    if point == -1:
        return len(text), len(text)
    return point, len(text) - 1


class CalculatorEngine:
    def __init__(self, max_digits=config.MAX_DIGIT_COUNT):
        self.max_digits = max_digits
        self.buffer = InputBuffer()
        self.memory = 0.0
        self.memory_active = False
        self.clear()

    # ── Observables ───────────────────────────────────────────────────────────
    @property
    def editing(self) -> bool:
        return self.state is EntryState.ENTERING

    @property
    def display(self) -> str:
        return self.buffer.render()

    def snapshot(self) -> dict:
        """Everything a front end needs to paint itself"""
        return {
            'display': self.display,
            'history': self.history,
            'memory_active': self.memory_active,
            'pending': self.pending.value if self.pending else None,
            'editing': self.editing,
            'locked': not self.is_valid(),
        }

    def is_valid(self) -> bool:
        """Whether input may continue; False after an overflow or NaN result"""
        return (self.editing and not self.buffer.is_empty()) or math.isfinite(self.value)

    # ── Entry commands ───────────────────────────────────────────────────────
    def clear(self):
        """Reset the entered value and the expression; memory is kept"""
        self.pending = None
        self.state = EntryState.IDLE
        self.value = 0.0
        self.history = ""
        self._last_operation = None
        self.buffer.reset()
        return True

    def digit(self, digit):
        """Add a digit 0-9 to the number being typed"""
        if not (isinstance(digit, str) and len(digit) == 1 and digit in "0123456789"):
            logger.warning(f"Ignoring invalid digit {digit!r}")
            return False
        if not self.is_valid():
            logger.debug(f"Digit {digit} rejected: input locked")
            return False
        if self.editing and len(self.buffer) >= self.max_digits:
            logger.debug(f"Digit {digit} rejected: buffer full")
            return False

        if not self.editing:
            self.state = EntryState.ENTERING
            self.buffer.reset()
        self.buffer.append_digit(digit)
        return True

    def point(self):
        """Place or remove the decimal point"""
        if not self.is_valid():
            return False
        if not self.editing:
            self.state = EntryState.ENTERING
            self.buffer.reset()
        self.buffer.toggle_point()
        return True

    def sign(self):
        """Flip the sign of the displayed number and keep editing it"""
        if not self.is_valid():
            return False
        self.state = EntryState.ENTERING
        self.buffer.toggle_sign()
        return True

    # ── Operations ───────────────────────────────────────────────────────────
    def operator(self, op):
        """
        Press one of + − × ÷ =.

        A binary operator waits for its second operand and is only applied
        when the next operator (or =) arrives. Pressing = again repeats the
        last operation on the result.
        """
        op = parse_operator(op)
        if op is None:
            logger.warning("Ignoring unknown operator")
            return False
        if not self.is_valid():
            logger.debug(f"Operator {op.value} rejected: input locked")
            return False

        if self.pending not in (None, Operator.EQUALS) and self.editing:
            operand = self.buffer.to_float()
            self.set_value(apply_operator(self.pending, self.value, operand))
            self._last_operation = (self.pending, operand)
            self.history += format_number(operand) + op.value
            if op is Operator.EQUALS:
                self.history += format_number(self.value)
        elif self.pending is Operator.EQUALS and op is Operator.EQUALS:
            self._repeat_last_operation()
        elif self.pending is None or self.pending is Operator.EQUALS:
            self.set_value(self.buffer.to_float())
            self.history = format_number(self.value) + op.value
        else:
            # Operator pressed twice in a row: the newer one wins
            self.history = self.history[:-1] + op.value
            if op is Operator.EQUALS:
                self.history += format_number(self.value)

        self.pending = op
        self.state = EntryState.RESULT
        return True

    def _repeat_last_operation(self):
        base = self.buffer.to_float()
        if self._last_operation is None:
            self.set_value(base)
            self.history = format_number(self.value) + Operator.EQUALS.value
            return
        op, operand = self._last_operation
        self.set_value(apply_operator(op, base, operand))
        self.history = (f"{format_number(base)}{op.value}"
                        f"{format_number(operand)}={format_number(self.value)}")

    def square(self):
        """x² of the displayed number"""
        if not self.is_valid():
            return False
        value = self.buffer.to_float()
        self.set_value(value * value)
        self.history = f"{format_number(value)}²={format_number(self.value)}"
        self._finish_unary()
        return True

    def square_root(self):
        """√x of the displayed number; negative input gives NaN"""
        if not self.is_valid():
            return False
        value = self.buffer.to_float()
        result = math.sqrt(value) if value >= 0 or math.isnan(value) else math.nan
        self.set_value(result)
        self.history = f"√{format_number(value)}={format_number(self.value)}"
        self._finish_unary()
        return True

    def _finish_unary(self):
        self.pending = None
        self._last_operation = None
        self.state = EntryState.RESULT

    # ── Memory ───────────────────────────────────────────────────────────────
    def memory_command(self, op):
        """MC, MR, M+ or M-; never touches the pending operator"""
        if op == "MC":
            self.memory = 0.0
            self.memory_active = False
        elif op == "MR":
            self.set_value(self.memory)
            if not math.isfinite(self.value):
                # "Infinity"/"NaN" in the buffer must not be typed onto
                self.state = EntryState.RESULT
        elif op == "M+":
            self.memory += self.buffer.to_float()
            self.memory_active = True
        elif op == "M-":
            self.memory -= self.buffer.to_float()
            self.memory_active = True
        else:
            logger.warning(f"Ignoring unknown memory command {op!r}")
            return False
        return True

    # ── Normalization ────────────────────────────────────────────────────────
    def set_value(self, value):
        """
        Commit a number as the current value and show it.

        The display holds at most max_digits digits. Extra fractional digits
        are rounded away (half away from zero); when the integer part alone
        does not fit the value becomes infinity of the same sign. NaN stays
        NaN.
        """
        value = float(value)
        text = format_number(abs(value))
        int_digits, all_digits = count_digits(text)

        if not math.isfinite(value) or int_digits > self.max_digits:
            value = self._overflow(value)
            text = format_number(abs(value))
        elif all_digits > self.max_digits:
            places = self.max_digits - int_digits
            rounded = Decimal(text).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
            value = math.copysign(float(rounded), value)
            text = format_number(abs(value))
            if count_digits(text)[0] > self.max_digits:
                value = self._overflow(value)
                text = format_number(abs(value))

        point = text.find(".")
        if point != -1:
            text = text[:point] + text[point + 1:]
            self.buffer.load(text, value < 0, point)
        else:
            self.buffer.load(text, value < 0)
        self.value = value

    def _overflow(self, value):
        value = value * math.inf
        logger.info(f"Value out of display range, input locked ({format_number(value)})")
        return value

    # ── Dispatch ─────────────────────────────────────────────────────────────
    def execute(self, command, arg=None):
        """Run a command by name, as front ends and the web API do"""
        handler = COMMANDS.get(command)
        if handler is None:
            logger.warning(f"Ignoring unknown command {command!r}")
            return False
        name, takes_arg = handler
        method = getattr(self, name)
        return method(arg) if takes_arg else method()


# command name -> (engine method, takes an argument)
COMMANDS = {
    'clear': ('clear', False),
    'digit': ('digit', True),
    'point': ('point', False),
    'sign': ('sign', False),
    'operator': ('operator', True),
    'square': ('square', False),
    'square_root': ('square_root', False),
    'memory': ('memory_command', True),
}
