#!/usr/bin/env python3
"""
Portfolio Weather Backend - Run Script
This script starts the FastAPI backend server
"""

import os
import sys
from pathlib import Path

def print_colored(message, color="blue"):
    """Print colored output"""
    colors = {
        "red": "\033[91m",
        "green": "\033[92m",
        "yellow": "\033[93m",
        "blue": "\033[94m",
        "reset": "\033[0m"
    }
    print(f"{colors.get(color, '')}{message}{colors['reset']}")

def check_file_exists(filepath, error_message):
    """Check if a file exists"""
    if not Path(filepath).exists():
        print_colored(f"❌ Error: {error_message}", "red")
        sys.exit(1)

def main():
    print_colored("🚀 Starting Portfolio Weather Backend...", "blue")

    # Check if we're in the backend directory
    check_file_exists("app/main.py", "app/main.py not found. Please run this script from the backend directory.")

    # The API key is optional: without it we go straight to wttr.in
    has_env_file = Path(".env").exists() or Path("../.env").exists()
    if not os.environ.get("OPENWEATHER_API_KEY") and not has_env_file:
        print_colored("⚠️  Warning: OPENWEATHER_API_KEY is not set.", "yellow")
        print("OpenWeather will be skipped and wttr.in used instead.")
        print("To enable it, create a .env file with:")
        print("  OPENWEATHER_API_KEY=your_api_key_here")
        print("  LOGGER=20")

    try:
        import uvicorn
    except ImportError:
        print_colored("❌ Dependencies not installed.", "red")
        print("Install them with: pip install -e .")
        sys.exit(1)

    print_colored("✅ All checks passed!", "green")
    print_colored("🌐 Starting Uvicorn server...", "blue")
    print("📍 Backend will be available at: http://localhost:8000")
    print("📍 Weather endpoint: http://localhost:8000/api/weather")
    print("📍 API Documentation: http://localhost:8000/docs")
    print()
    print("Press Ctrl+C to stop the server")

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)

if __name__ == "__main__":
    main()
