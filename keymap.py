"""
Keyboard bindings for TapCalc
Static table from key descriptors to engine commands, used by the GUI dispatcher
"""
from collections import namedtuple

# key: typed character, keysym: Tk key name (case-insensitive), alt: Alt must be held
KeyBinding = namedtuple("KeyBinding", ["key", "keysym", "alt", "label", "command", "arg"])


def _bind(label, command, arg=None, key=None, keysym=None, alt=False):
    return KeyBinding(key, keysym, alt, label, command, arg)


# Order matters: the first matching binding wins, so Alt combinations come
# before the plain keys that share a character with them.
KEY_BINDINGS = (
    _bind("MC", "memory", "MC", keysym="c", alt=True),
    _bind("MR", "memory", "MR", keysym="r", alt=True),
    _bind("M+", "memory", "M+", key="+", alt=True),
    _bind("M-", "memory", "M-", key="-", alt=True),

    _bind("C", "clear", keysym="c"),
    _bind("√", "square_root", key="/", alt=True),
    _bind("x²", "square", key="*", alt=True),
    _bind("÷", "operator", "÷", key="/"),

    _bind("7", "digit", "7", key="7"),
    _bind("8", "digit", "8", key="8"),
    _bind("9", "digit", "9", key="9"),
    _bind("×", "operator", "×", key="*"),

    _bind("4", "digit", "4", key="4"),
    _bind("5", "digit", "5", key="5"),
    _bind("6", "digit", "6", key="6"),
    _bind("−", "operator", "−", key="-"),

    _bind("1", "digit", "1", key="1"),
    _bind("2", "digit", "2", key="2"),
    _bind("3", "digit", "3", key="3"),
    _bind("+", "operator", "+", key="+"),

    _bind("±", "sign", key="!"),
    _bind("0", "digit", "0", key="0"),
    _bind(".", "point", key="."),
    _bind("=", "operator", "=", keysym="Return"),
    _bind("=", "operator", "=", keysym="KP_Enter"),
)


def lookup(key=None, keysym=None, alt=False):
    """Return the first binding matching a key event, or None"""
    for binding in KEY_BINDINGS:
        if binding.key is not None and key != binding.key:
            continue
        if binding.alt and not alt:
            continue
        if binding.keysym is not None and (keysym or "").lower() != binding.keysym.lower():
            continue
        return binding
    return None


def describe(binding):
    """Human readable shortcut, e.g. 'Alt+/'"""
    name = binding.key if binding.key is not None else binding.keysym
    if binding.keysym is not None and len(binding.keysym) == 1:
        name = binding.keysym.upper()
    return f"Alt+{name}" if binding.alt else name
