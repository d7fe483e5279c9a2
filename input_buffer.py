"""
Input Buffer for TapCalc
Holds the number being typed: digits, decimal point position and sign
"""


class InputBuffer:
    def __init__(self):
        self.digits = []
        self.decimal_position = None
        self.negative = False

    def reset(self):
        """Empty the buffer and clear the point and sign"""
        self.digits = []
        self.decimal_position = None
        self.negative = False

    def is_empty(self):
        return not self.digits

    def append_digit(self, digit):
        """Add a digit; a lone leading zero is replaced instead of extended"""
        if self.digits == ["0"] and self.decimal_position is None:
            self.digits[0] = digit
        else:
            self.digits.append(digit)

    def toggle_point(self):
        """Place the decimal point, or take it back if nothing follows it yet"""
        if not self.digits:
            self.digits = ["0"]
            self.decimal_position = 1
        elif self.decimal_position == len(self.digits):
            self.decimal_position = None
        elif self.decimal_position is None:
            self.decimal_position = len(self.digits)

    def toggle_sign(self):
        self.negative = not self.negative

    def load(self, text, negative, decimal_position=None):
        """Store an already normalized digit string (no separator in it)"""
        self.digits = list(text)
        self.negative = negative
        self.decimal_position = decimal_position

    def render(self):
        """Canonical text of the buffer, e.g. "-12.5" or "0." while typing"""
        chars = list(self.digits)
        if self.decimal_position is not None:
            chars.insert(self.decimal_position, ".")
        return ("-" if self.negative else "") + ("".join(chars) or "0")

    def to_float(self):
        # float() understands "Infinity", "NaN" and a trailing point like "5."
        return float(self.render())

    def __len__(self):
        return len(self.digits)

    def __repr__(self):
        return f"InputBuffer({self.render()!r})"
