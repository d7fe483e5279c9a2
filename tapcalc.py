"""
TapCalc Desktop Calculator
Main application entry point
"""
import atexit
import logging
import os
import subprocess
import sys
import tkinter as tk

import config
from gui import TapCalcGUI
from logging_config import setup_logging

logger = logging.getLogger(__name__)

# Global variable to track API process
api_process = None


def start_api_server():
    """Start the Flask API server in a separate process"""
    global api_process
    script_dir = os.path.dirname(os.path.abspath(__file__))
    api_path = os.path.join(script_dir, 'api.py')
    try:
        api_process = subprocess.Popen(
            [sys.executable, api_path],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            creationflags=subprocess.CREATE_NEW_CONSOLE if sys.platform == 'win32' else 0
        )
    except OSError as e:
        logger.error(f"Failed to start API server: {e}")
        return
    print(f"API server started (PID: {api_process.pid})")
    print("="*60)
    print(f"TapCalc API: http://{config.WEB_HOST}:{config.WEB_PORT}/api")
    print("="*60)


def cleanup_api_server():
    """Terminate the API server when the main application exits"""
    global api_process
    if api_process is None:
        return
    try:
        api_process.terminate()
        api_process.wait(timeout=5)
        print("API server stopped")
    except subprocess.TimeoutExpired:
        logger.warning("API server did not stop in time, killing it")
        api_process.kill()
    api_process = None


def main():
    setup_logging()

    if config.START_WEB_API:
        start_api_server()
        atexit.register(cleanup_api_server)

    root = tk.Tk()
    TapCalcGUI(root)
    root.mainloop()

    cleanup_api_server()


if __name__ == "__main__":
    main()
