"""
Flask REST API for TapCalc
Exposes the calculator engine as JSON endpoints
"""
import logging
import threading

from flask import Flask, jsonify, request
from flask_cors import CORS

import config
import keymap
from calculator import CalculatorEngine, COMMANDS, MEMORY_COMMANDS, parse_operator

logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app)  # Enable CORS for all routes

# One calculator per server process; commands run one at a time
engine = CalculatorEngine()
engine_lock = threading.Lock()


class BadCommand(ValueError):
    pass


def validate_command(command, arg):
    """Check a command request before it reaches the engine"""
    if not isinstance(command, str) or command not in COMMANDS:
        raise BadCommand(f"Unknown command: {command!r}")
    takes_arg = COMMANDS[command][1]
    if not takes_arg:
        return
    if command == 'digit':
        if not (isinstance(arg, str) and len(arg) == 1 and arg in "0123456789"):
            raise BadCommand("digit needs one of '0'..'9'")
    elif command == 'operator':
        if parse_operator(arg) is None:
            raise BadCommand("operator needs one of + − × ÷ =")
    elif command == 'memory':
        if arg not in MEMORY_COMMANDS:
            raise BadCommand(f"memory needs one of {', '.join(MEMORY_COMMANDS)}")


@app.errorhandler(BadCommand)
def handle_bad_command(e):
    return jsonify({'success': False, 'error': str(e)}), 400


@app.route('/api')
def api_info():
    """API information"""
    return jsonify({
        'success': True,
        'data': {
            'name': config.APP_NAME,
            'version': config.VERSION,
            'endpoints': {
                'GET /api/state': 'Current display, history and memory indicator',
                'POST /api/command': 'Run one command: {"command": ..., "arg": ...}',
                'POST /api/clear': 'Clear the entry (memory is kept)',
                'GET /api/keymap': 'Keyboard shortcuts of the desktop app',
            },
            'commands': sorted(COMMANDS),
        }
    })


@app.route('/api/state')
def get_state():
    """Get the current engine state"""
    with engine_lock:
        return jsonify({'success': True, 'data': engine.snapshot()})


@app.route('/api/command', methods=['POST'])
def run_command():
    """Run one command and return the new state"""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise BadCommand("Expected a JSON object")
    command = payload.get('command')
    arg = payload.get('arg')
    validate_command(command, arg)

    try:
        with engine_lock:
            accepted = engine.execute(command, arg)
            state = engine.snapshot()
    except Exception as e:
        logger.exception(f"Command {command} failed")
        return jsonify({'success': False, 'error': str(e)}), 500

    return jsonify({'success': True, 'accepted': accepted, 'data': state})


@app.route('/api/clear', methods=['POST'])
def clear():
    """Clear the entered value and history"""
    with engine_lock:
        engine.clear()
        return jsonify({'success': True, 'data': engine.snapshot()})


@app.route('/api/keymap')
def get_keymap():
    """Keyboard shortcuts of the desktop front end"""
    formatted = []
    for binding in keymap.KEY_BINDINGS:
        formatted.append({
            'label': binding.label,
            'shortcut': keymap.describe(binding),
            'command': binding.command,
            'arg': binding.arg,
        })
    return jsonify({'success': True, 'data': formatted, 'count': len(formatted)})


def main():
    from logging_config import setup_logging
    setup_logging()

    print("\n" + "="*60)
    print("TapCalc API Server")
    print("="*60)
    print(f"Server starting on http://{config.WEB_HOST}:{config.WEB_PORT}")
    print(f"Access from this device: http://localhost:{config.WEB_PORT}/api")
    print("="*60 + "\n")

    app.run(host=config.WEB_HOST, port=config.WEB_PORT, debug=False)


if __name__ == '__main__':
    main()
