"""Pytest configuration and fixtures."""

import pytest

# Sample TypeScript code for testing
SAMPLE_TS_ANY = "const x: any = 1;\n"

SAMPLE_TS_LOGICAL_IF = '''
function check(a: boolean, b: boolean): number {
  if (a && b) {
    return 1;
  }
  return 0;
}
'''

SAMPLE_TS_SWITCH = '''
function pick(x: number): string {
  switch (x) {
    case 1:
    case 2:
      return "low";
    case 3:
      return "mid";
    default:
      return "high";
  }
}
'''

SAMPLE_TS_LOOPS = '''
function loops(items: number[], obj: Record<string, number>): number {
  for (let i = 0; i < items.length; i++) {}
  for (const k in obj) {}
  for (const v of items) {}
  while (items.length > 3) {
    items.pop();
  }
  do {
    items.push(1);
  } while (items.length < 2);
  try {
    JSON.parse("x");
  } catch (e) {}
  return items.length ? 1 : 0;
}
'''

SAMPLE_TS_CLASS = '''
class Cart {
  total(items: number[]): number {
    if (items.length === 0) {
      return 0;
    }
    return items.reduce((a, b) => a + b, 0);
  }
}
'''

SAMPLE_TS_BROKEN = '''
function broken( {
  console.log("still scanned");
'''

SAMPLE_TSX_COMPONENT = '''
import { useState } from "react";

export default function Home() {
  const [count, setCount] = useState(0);
  return <p>Welcome to our site</p>;
}
'''


def function_with_branches(name: str, branches: int, indent: str = "  ") -> str:
    """A function whose body holds ``branches`` independent if statements."""
    body = "".join(f"{indent}if (a > {i}) {{\n{indent}  a++;\n{indent}}}\n" for i in range(branches))
    return f"function {name}(a: number): number {{\n{body}{indent}return a;\n}}\n"


def function_with_statements(name: str, statements: int) -> str:
    """A branch-free function whose body holds ``statements`` declarations."""
    body = "".join(f"  const v{i} = {i};\n" for i in range(statements))
    return f"function {name}(): void {{\n{body}}}\n"


@pytest.fixture
def sample_ts_any():
    """Single line using the any type."""
    return SAMPLE_TS_ANY


@pytest.fixture
def sample_ts_logical_if():
    """If statement with a logical AND."""
    return SAMPLE_TS_LOGICAL_IF


@pytest.fixture
def sample_ts_switch():
    """Switch with an empty case clause."""
    return SAMPLE_TS_SWITCH


@pytest.fixture
def sample_ts_loops():
    """One of every loop form plus catch and ternary."""
    return SAMPLE_TS_LOOPS


@pytest.fixture
def sample_ts_class():
    """Class with a method containing an arrow callback."""
    return SAMPLE_TS_CLASS


@pytest.fixture
def sample_ts_broken():
    """Source with a syntax error."""
    return SAMPLE_TS_BROKEN


@pytest.fixture
def sample_tsx_component():
    """Small Next.js page component."""
    return SAMPLE_TSX_COMPONENT


@pytest.fixture
def make_branchy_function():
    """Factory for functions with a given number of if statements."""
    return function_with_branches


@pytest.fixture
def make_long_function():
    """Factory for branch-free functions with a given statement count."""
    return function_with_statements
