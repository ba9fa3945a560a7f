import subprocess
import sys
import os

TEST_DIR = "app/tests"

TEST_ENV = {
    "DATABASE_URL": "sqlite+aiosqlite:///./test.db",
    "SECRET_KEY": "test-secret-key-for-testing-only-min-32-chars",
    "DEBUG": "true",
    "ENVIRONMENT": "testing",
    "RATE_LIMIT_PER_MINUTE": "1000",
    "SKIP_CONFIG_VALIDATION": "true",
}

# `python run_tests.py schedule` runs the whole scheduling slice
SUITES = {
    "schedule": [
        "test_time_utils.py",
        "test_availability_validation.py",
        "test_schedule_service.py",
        "test_schedule_api.py",
    ],
}


def _available_tests() -> list[str]:
    return sorted(
        f.removeprefix("test_").removesuffix(".py")
        for f in os.listdir(TEST_DIR)
        if f.startswith("test_") and f.endswith(".py") and f != "test_utils.py"
    )


def _run_pytest(paths: list[str], *extra: str) -> int:
    command = ["python", "-m", "pytest", *paths, "-v", "--tb=short", "--disable-warnings", *extra]
    print(f"🚀 Running command: {' '.join(command)}")
    print("-" * 60)

    try:
        result = subprocess.run(command, env={**os.environ, **TEST_ENV}, timeout=300)
    except subprocess.TimeoutExpired:
        print("\n⏰ Tests timed out after 5 minutes")
        return 1
    except KeyboardInterrupt:
        print("\n🛑 Tests interrupted by user")
        return 1

    if result.returncode == 0:
        print("\n🎉 All tests passed!")
    else:
        print(f"\n❌ Tests failed with exit code {result.returncode}")
    return result.returncode


def run_tests() -> int:
    print("🧪 Starting Meet Scheduling Tests...")
    print("=" * 60)
    return _run_pytest([TEST_DIR], "-x")


def run_named(name: str) -> int:
    if name in SUITES:
        print(f"🧪 Running suite: {name}")
        return _run_pytest([f"{TEST_DIR}/{f}" for f in SUITES[name]])

    test_path = f"{TEST_DIR}/test_{name}.py"
    if not os.path.exists(test_path):
        print(f"❌ Test file {test_path} not found")
        print(f"Available tests: {', '.join(_available_tests() + list(SUITES))}")
        return 1

    print(f"🧪 Running single test: {name}")
    return _run_pytest([test_path])


if __name__ == "__main__":
    if not os.path.isdir(TEST_DIR):
        print("❌ Error: Please run this script from the project root directory")
        sys.exit(1)

    sys.exit(run_named(sys.argv[1]) if len(sys.argv) > 1 else run_tests())
