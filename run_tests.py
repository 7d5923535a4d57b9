#!/usr/bin/env python3
"""
Main test runner for the Crumble front end tests.
"""

import sys
import os
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)


def run_smoke_test() -> bool:
    """Scan, parse and print one expression end to end."""
    print("Crumble Front End Test Suite")
    print("=" * 60)

    try:
        from crumble import AstPrinter, DiagnosticSink, Parser, scan
    except ImportError as e:
        print(f"Failed to import crumble: {e}")
        return False

    sink = DiagnosticSink()
    source = "(1 + 2) * -3 >= 4 == true"

    print("Lexing...")
    tokens = scan(source, sink)
    print(f"   Generated {len(tokens)} tokens")

    print("Parsing...")
    expr = Parser(tokens, sink).parse()
    if expr is None or sink.had_error:
        print("   Parsing failed")
        return False

    print(AstPrinter().print(expr))
    print()
    return True


def run_all_tests() -> bool:
    """Run the smoke test and then the unit tests under tests/."""
    if not run_smoke_test():
        return False

    loader = unittest.TestLoader()
    suite = loader.discover(os.path.join(project_root, "tests"), pattern="test_*.py")
    result = unittest.TextTestRunner(verbosity=2).run(suite)

    print("=" * 60)
    print(f"Ran {result.testsRun} tests: "
          f"{len(result.failures)} failures, {len(result.errors)} errors")
    return result.wasSuccessful()


if __name__ == "__main__":
    sys.exit(0 if run_all_tests() else 1)
