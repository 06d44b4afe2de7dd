#!/usr/bin/env python3
"""
Campus AutoLogin - Main Application Entry Point

Entry point for the application. Checks system requirements, validates dependencies,
and starts up the GUI, or runs a single login from the saved settings without it.
"""

import sys
import os
import argparse

try:
    from src.config import APP_NAME, VERSION
    from src.utils import (
        system_info,
        path_manager,
        autostart_manager,
        SettingsStore,
        setup_logging,
    )
    from src.network import NetworkBackend, NetworkError

except ImportError as e:
    print(f"Import error: {e}")
    print("Make sure all dependencies are installed: pip install -e .")
    sys.exit(1)


def check_system_requirements() -> tuple:
    """
    Check system requirements and compatibility

    Returns:
        tuple: (requirements_met, issues_list)
    """
    issues = []

    if sys.version_info < (3, 9):
        issues.append(
            f"Python 3.9+ required, found {sys.version_info.major}.{sys.version_info.minor}"
        )

    if not system_info.is_supported():
        issues.append(f"Unsupported OS: {system_info.get_system_summary()}")

    if not path_manager.ensure_directory(path_manager.get_config_dir()):
        issues.append(f"Config directory is not writable: {path_manager.get_config_dir()}")

    return len(issues) == 0, issues


def check_dependencies() -> tuple:
    """
    Check if all required dependencies are available

    Returns:
        tuple: (dependencies_met, missing_list)
    """
    required_modules = [
        "customtkinter",
        "requests",
        "bs4",
        "psutil",
    ]

    # Platform-specific requirements
    if system_info.is_windows():
        required_modules.append("winreg")  # Built-in but check anyway

    missing = []

    for module in required_modules:
        try:
            __import__(module)
        except ImportError:
            missing.append(module)

    return len(missing) == 0, missing


def print_system_info():
    """Print system information for debugging"""
    print(f"System: {system_info.get_system_summary()}")
    print(f"Python: {sys.version.split()[0]}")
    print(f"Autostart: {'Enabled' if autostart_manager.is_enabled() else 'Disabled'}")

    if system_info.is_linux():
        distro_info = system_info.get_linux_distro()
        if distro_info:
            print(f"Distribution: {distro_info['pretty_name']}")


def create_argument_parser() -> argparse.ArgumentParser:
    """Create command line argument parser"""
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Campus AutoLogin - log in to the campus network automatically",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                    # Start GUI application
  %(prog)s --no-gui           # Log in once with the saved settings
  %(prog)s --check            # Check system compatibility
  %(prog)s --system-info      # Show interfaces and network status
  %(prog)s --version          # Show version information
        """,
    )

    parser.add_argument("--version", action="version", version=f"{APP_NAME} v{VERSION}")

    parser.add_argument(
        "--check", action="store_true", help="Check system requirements and exit"
    )

    parser.add_argument(
        "--debug", action="store_true", help="Enable debug mode with verbose logging"
    )

    parser.add_argument(
        "--no-gui",
        action="store_true",
        help="Log in once with the saved settings and exit",
    )

    parser.add_argument(
        "--system-info", action="store_true", help="Display system information and exit"
    )

    return parser


def handle_check_mode():
    """Handle system requirements check mode"""
    print(f"Checking system requirements for {APP_NAME} v{VERSION}...")
    print()

    print_system_info()
    print()

    print("System requirements check:")
    req_ok, req_issues = check_system_requirements()

    if req_ok:
        print("System requirements: PASSED")
    else:
        print("System requirements: FAILED")
        for issue in req_issues:
            print(f"   • {issue}")
    print()

    print("Dependency check:")
    dep_ok, missing_deps = check_dependencies()

    if dep_ok:
        print("Dependencies: PASSED")
    else:
        print("Dependencies: FAILED")
        print("   Missing modules:")
        for dep in missing_deps:
            print(f"   • {dep}")
        print("\n   Install missing dependencies:")
        print("   pip install -e .")
    print()

    overall_ok = req_ok and dep_ok
    if overall_ok:
        print(f"System is ready to run {APP_NAME}!")
        return 0
    else:
        print("System is not ready. Please fix the issues above.")
        return 1


def handle_system_info_mode():
    """Handle system information display mode"""
    print(f"{APP_NAME} v{VERSION} - System information")
    print("=" * 60)
    print_system_info()

    print("\nNetwork interfaces:")
    interfaces = system_info.get_network_interfaces()
    if interfaces:
        for iface in interfaces:
            addresses = ", ".join(iface["addresses"]) or "no IPv4 address"
            print(f"   {iface['name']}: {addresses}")
    else:
        print("   None detected")

    print("\nNetwork status:")
    backend = NetworkBackend(SettingsStore())
    try:
        status = backend.get_network_status()
        print(f"   Internet reachable: {'Yes' if status.connected else 'No'}")
        print(f"   {status.connectivity_result}")
        if status.login_url:
            print(f"   Login page: {status.login_url}")
        if status.detection_error:
            print(f"   Detection error: {status.detection_error}")
    except NetworkError as e:
        print(f"   Status check failed: {e}")

    print("\nApplication paths:")
    print(f"   Config Directory: {path_manager.get_config_dir()}")
    print(f"   Logs Directory: {path_manager.get_logs_dir()}")

    return 0


def handle_console_login():
    """Log in once using the saved settings"""
    logger = setup_logging()
    backend = NetworkBackend(SettingsStore())

    print("Logging in with saved settings...")
    try:
        backend.perform_login()
    except Exception as e:
        logger.error("Console login failed: %s", e)
        print(f"Login failed: {e}")
        return 1

    print("Login submitted")
    return 0


def main():
    """Main application entry point"""
    parser = create_argument_parser()
    args = parser.parse_args()

    if args.debug:
        os.environ["CAMPUS_AUTOLOGIN_DEBUG"] = "true"
        setup_logging(debug=True)
        print("Debug mode enabled")

    if args.system_info:
        return handle_system_info_mode()

    if args.check:
        return handle_check_mode()

    if args.no_gui:
        return handle_console_login()

    print(f"Starting {APP_NAME} v{VERSION}...")

    req_ok, req_issues = check_system_requirements()
    dep_ok, missing_deps = check_dependencies()

    if not dep_ok:
        print("Missing dependencies:")
        for dep in missing_deps:
            print(f"   • {dep}")
        print("\nInstall with: pip install -e .")
        return 1

    if not req_ok:
        print("System issues detected:")
        for issue in req_issues:
            print(f"   • {issue}")

    try:
        if args.debug:
            print_system_info()
            print()

        from src.ui import main as ui_main

        ui_main()
        return 0

    except KeyboardInterrupt:
        print("\nApplication interrupted by user")
        return 0

    except Exception as e:
        print(f"Unexpected error: {e}")

        if args.debug:
            import traceback

            traceback.print_exc()

        return 1


if __name__ == "__main__":
    exit_code = main()
    sys.exit(exit_code)
