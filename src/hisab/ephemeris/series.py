import numpy as np


def periodic_table(rows) -> np.ndarray:
    """Freeze a list of (amplitude, phase, rate) rows into a read-only array."""
    table = np.array(rows, dtype=np.float64).reshape(-1, 3)
    table.setflags(write=False)
    return table


def evaluate_periodic(table: np.ndarray, tau: float) -> float:
    """Sum of amplitude * cos(phase + rate * tau) over every row of the table."""
    return float(np.sum(table[:, 0] * np.cos(table[:, 1] + table[:, 2] * tau)))


def evaluate_power_series(tables: tuple[np.ndarray, ...], tau: float) -> float:
    """Evaluate a VSOP87-style variable: sum over k of tau**k times series k."""
    return sum(evaluate_periodic(table, tau) * tau**k for k, table in enumerate(tables))
