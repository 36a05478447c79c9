#!/usr/bin/env python3
"""
Initialize the cargo dispatch dashboard.

This script sets up the project by:
- Checking the Python version and environment variables
- Validating configuration files
- Creating the local storage directory and seeding demo drivers
- Running a quick store health check
"""

import os
import sys
from pathlib import Path

import yaml
from dotenv import load_dotenv


def check_python_version() -> bool:
    """Verify Python version is 3.10 or higher."""
    if sys.version_info < (3, 10):
        print(f"❌ Python 3.10+ required. Current version: {sys.version}")
        return False
    print(f"✅ Python version: {sys.version_info.major}.{sys.version_info.minor}")
    return True


def check_env_file() -> bool:
    """Check if .env file exists (defaults apply without one)."""
    env_path = Path(".env")
    if not env_path.exists():
        print("⚠️  .env file not found, using defaults from config/config.yaml")
        print("   To customize: cp .env.example .env")
        return True
    print("✅ .env file exists")
    return True


def check_storage_env() -> bool:
    """Load environment variables and check the ones the chosen backend needs."""
    load_dotenv()

    backend = os.getenv("STORAGE_BACKEND", "").lower()
    if backend and backend not in ("memory", "local", "firestore"):
        print(f"❌ Unsupported STORAGE_BACKEND: {backend}")
        return False

    if backend == "firestore":
        missing = [
            var
            for var in ("FIRESTORE_PROJECT_ID", "GOOGLE_APPLICATION_CREDENTIALS")
            if not os.getenv(var) or os.getenv(var, "").startswith("your_")
        ]
        if missing:
            print(f"❌ Firestore backend needs: {', '.join(missing)}")
            return False

    print(f"✅ Storage backend: {backend or 'from config.yaml'}")
    return True


def check_config_files() -> bool:
    """Validate configuration files exist and are valid."""
    config_path = Path("config/config.yaml")
    if not config_path.exists():
        print(f"❌ Main configuration not found: {config_path}")
        return False

    try:
        with open(config_path) as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        print(f"❌ Error parsing config.yaml: {e}")
        return False

    if not config:
        print("❌ config.yaml is empty")
        return False

    print("✅ config.yaml is valid YAML")
    return True


def check_packages() -> bool:
    """Check that the runtime dependencies are installed."""
    required_packages = [
        "pydantic",
        "pydantic_settings",
        "structlog",
        "yaml",
        "dotenv",
    ]
    if os.getenv("STORAGE_BACKEND", "").lower() == "firestore":
        required_packages.append("google.cloud.firestore")

    missing = []
    for package in required_packages:
        try:
            __import__(package)
        except ImportError:
            missing.append(package)

    if missing:
        print(f"❌ Not installed: {', '.join(missing)}")
        print("   Run: pip install -e .")
        return False

    print("✅ Runtime dependencies installed")
    return True


def seed_storage() -> bool:
    """Create the configured store (seeding the local backend) and load it."""
    from cargo_dispatch.core.logging import configure_logging
    from cargo_dispatch.state import create_dispatch_store

    configure_logging()
    try:
        store = create_dispatch_store()
    except Exception as e:
        print(f"❌ Could not open the document store: {e}")
        return False

    store.fetch_drivers()
    store.fetch_cargos()
    print(f"✅ Store ready: {len(store.drivers)} drivers, {len(store.cargos)} cargos")
    return True


def display_next_steps():
    """Show user what to do next."""
    print("\n" + "=" * 60)
    print("🎉 Project initialization complete!")
    print("=" * 60)
    print("\nNext steps:")
    print("\n1. Review config/config.yaml (backend, collections, seed drivers)")
    print("2. For the remote backend set STORAGE_BACKEND=firestore in .env")
    print("3. Run the tests:")
    print("   pytest")
    print("\n" + "=" * 60)


def main():
    """Run all initialization checks."""
    print("=" * 60)
    print("Cargo Dispatch - Initialization")
    print("=" * 60)
    print()

    checks = [
        ("Python version", check_python_version),
        (".env file", check_env_file),
        ("Storage environment", check_storage_env),
        ("Configuration files", check_config_files),
        ("Packages", check_packages),
        ("Document store", seed_storage),
    ]

    passed = 0
    failed = 0

    for name, check_func in checks:
        print(f"\nChecking {name}...")
        if check_func():
            passed += 1
        else:
            failed += 1

    print("\n" + "=" * 60)
    print(f"Results: {passed} passed, {failed} failed")
    print("=" * 60)

    if failed == 0:
        display_next_steps()
        return 0
    else:
        print("\n❌ Some checks failed. Please fix the issues above.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
