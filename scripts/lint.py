"""
Lint script runner.
"""
import subprocess


def main():
    """
    Lint the LEXOR project using flake8 and pylint.
    """
    print("Running flake8...")
    subprocess.run([
        "flake8",
        "./lexorlang",
        "./lexor.py",
        "--max-line-length=120",
        "--exclude=lexorlang/tests"
    ], check=True)

    print("Running pylint...")
    subprocess.run([
        "pylint",
        "./lexorlang",
        "./lexor.py",
        "--max-line-length=120",
        "--ignore=tests"
    ], check=True)


if __name__ == "__main__":
    main()
