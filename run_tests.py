#!/usr/bin/env python3
"""
Test runner script for cuboid reboot tests.

This script provides an easy way to run tests with different configurations.
"""

import sys
import subprocess


def run_command(cmd):
    """Run a command and return the result."""
    print(f"Running: {' '.join(cmd)}")
    result = subprocess.run(cmd, capture_output=True, text=True)
    print(result.stdout)
    if result.stderr:
        print("STDERR:", result.stderr)
    return result.returncode == 0


def main():
    """Main test runner function."""
    python_cmd = sys.executable

    if len(sys.argv) > 1:
        if sys.argv[1] == "--help" or sys.argv[1] == "-h":
            print("Usage: python run_tests.py [option]")
            print("\nOptions:")
            print("  --help, -h      Show this help message")
            print("  --verbose, -v   Run tests with verbose output")
            print("  --coverage      Run tests with coverage report")
            print("  --fast          Skip the HDF5 store and CLI tests")
            print("  --module <name> Run one test module (e.g. cube)")
            print("  --method <name> Run specific test method")
            print("\nExamples:")
            print("  python run_tests.py")
            print("  python run_tests.py --coverage")
            print("  python run_tests.py --module shape")
            return

        elif sys.argv[1] == "--verbose" or sys.argv[1] == "-v":
            cmd = [python_cmd, "-m", "pytest", "tests/", "-v"]

        elif sys.argv[1] == "--coverage":
            cmd = [python_cmd, "-m", "pytest", "tests/", "--cov=cuboid_reboot", "--cov-report=term-missing", "--cov-report=html"]

        elif sys.argv[1] == "--fast":
            cmd = [python_cmd, "-m", "pytest", "tests/", "-v", "--tb=short",
                   "--ignore=tests/test_shapestore.py", "--ignore=tests/test_cli.py"]

        elif sys.argv[1] == "--module" and len(sys.argv) > 2:
            module_name = sys.argv[2]
            cmd = [python_cmd, "-m", "pytest", f"tests/test_{module_name}.py", "-v"]

        elif sys.argv[1] == "--method" and len(sys.argv) > 2:
            method_name = sys.argv[2]
            cmd = [python_cmd, "-m", "pytest", "-k", method_name, "-v"]

        else:
            print(f"Unknown option: {sys.argv[1]}")
            print("Use --help for available options")
            return
    else:
        cmd = [python_cmd, "-m", "pytest", "tests/", "-v", "--tb=short"]

    success = run_command(cmd)

    if success:
        print("\nAll tests passed!")
    else:
        print("\nSome tests failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
