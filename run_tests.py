#!/usr/bin/env python3
"""Test runner for Panini with comprehensive reporting."""

import sys
import subprocess
import os
from pathlib import Path

def run_tests():
    """Run all tests with coverage reporting."""

    # Change to the project directory
    os.chdir(Path(__file__).parent)

    print("🧪 Running Panini Test Suite")
    print("=" * 50)

    # Install the package with its test extras
    print("📦 Installing test requirements...")
    try:
        subprocess.run([
            sys.executable, "-m", "pip", "install", "-e", ".[test]"
        ], check=True, capture_output=True)
        print("✅ Test requirements installed successfully")
    except subprocess.CalledProcessError as e:
        print(f"❌ Failed to install test requirements: {e}")
        return False

    # Run tests with coverage
    print("\n🔍 Running tests with coverage...")
    try:
        result = subprocess.run([
            sys.executable, "-m", "pytest",
            "tests/",
            "-v",
            "--cov=panini_pkg",
            "--cov-report=html",
            "--cov-report=term-missing",
            "--cov-fail-under=80"
        ], check=False)

        if result.returncode == 0:
            print("\n✅ All tests passed!")
            print("📊 Coverage report generated in htmlcov/")
            return True
        else:
            print(f"\n❌ Tests failed with return code {result.returncode}")
            return False

    except OSError as e:
        print(f"❌ Error running tests: {e}")
        return False

def run_concurrency_tests():
    """Run the build phase tests, reporting the slowest ones."""
    print("\n⚡ Running concurrency tests...")
    try:
        result = subprocess.run([
            sys.executable, "-m", "pytest",
            "tests/test_coordinator.py",
            "-v",
            "--durations=10"
        ], check=False)

        if result.returncode == 0:
            print("✅ Concurrency tests passed!")
            return True
        else:
            print("❌ Concurrency tests failed!")
            return False

    except OSError as e:
        print(f"❌ Error running concurrency tests: {e}")
        return False

def main():
    """Main test runner."""
    success = True

    # Run all tests
    if not run_tests():
        success = False

    # Run concurrency tests
    if not run_concurrency_tests():
        success = False

    print("\n" + "=" * 50)
    if success:
        print("🎉 All test suites completed successfully!")
        print("📈 Check htmlcov/index.html for detailed coverage report")
    else:
        print("💥 Some tests failed. Please review the output above.")

    return 0 if success else 1

if __name__ == "__main__":
    sys.exit(main())
