#!/usr/bin/env python3
"""
Campus AutoLogin - Application Entry Point

Main entry point script that sets up the Python path and launches the application.
This is also the command registered for start-at-login when running from source.
"""

import sys
import os
from pathlib import Path

# Get the directory containing this script (project root)
PROJECT_ROOT = Path(__file__).parent

# Add project root to Python path so we can import src as a package
sys.path.insert(0, str(PROJECT_ROOT))


def main():
    """Main entry point"""
    try:
        # Import and run the main application module
        import src.main

        return src.main.main()

    except ImportError as e:
        print(f"Import error: {e}")
        print(
            f"Make sure you're running from the project root directory: {PROJECT_ROOT}"
        )
        print("Install dependencies with: pip install -e .")
        return 1

    except KeyboardInterrupt:
        print("\nApplication interrupted by user")
        return 0


if __name__ == "__main__":
    if not (PROJECT_ROOT / "src").exists():
        print("Error: src directory not found")
        print(f"Make sure you're running this script from: {PROJECT_ROOT}")
        sys.exit(1)

    # Autostart launches us from an arbitrary working directory
    os.chdir(PROJECT_ROOT)

    exit_code = main()
    sys.exit(exit_code)
