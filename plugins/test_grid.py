#!/usr/bin/env python3
"""
Tests for the grid buffer store and the wave propagator.

Verifies:
1. Ping-pong buffers swap without reallocating
2. Resize flattens the water and is idempotent
3. Pixel-to-cell mapping and off-grid rejection
4. Propagation matches the cell-by-cell rule, keeps the outer ring, decays
"""

import numpy as np
from water_ripples.grid import GridBuffers, GRID_SIZE
from water_ripples.propagator import propagate, WavePropagator


def _loop_propagate(current, nxt, damping):
    """Reference cell-by-cell update, in place on nxt."""
    n = current.shape[0]
    for y in range(1, n - 1):
        for x in range(1, n - 1):
            nxt[y, x] = (current[y - 1, x] + current[y + 1, x] +
                         current[y, x + 1] + current[y, x - 1]) / 2 - nxt[y, x]
            nxt[y, x] *= damping
    return nxt


def test_swap_reuses_buffers():
    print("Testing GridBuffers swap...")
    buffers = GridBuffers(size=8, surface_size=(80, 80))
    a = buffers.read()
    b = buffers.write_target()
    assert a is not b
    buffers.swap()
    assert buffers.read() is b
    assert buffers.write_target() is a
    buffers.swap()
    assert buffers.read() is a
    print("  ✓ swap flips roles of the same two arrays")


def test_resize_idempotent():
    print("Testing resize...")
    buffers = GridBuffers(surface_size=(640, 480))
    assert buffers.read().shape == (GRID_SIZE, GRID_SIZE)
    buffers.read()[10, 10] = 42.0
    buffers.write_target()[3, 3] = -7.0

    buffers.resize(800, 600)
    once = buffers.read().copy()
    buffers.resize(800, 600)
    twice = buffers.read().copy()

    assert buffers.surface_size == (800, 600)
    assert np.array_equal(once, twice)
    assert not once.any()
    assert not buffers.write_target().any()
    print("  ✓ resize zeroes both grids, twice == once")


def test_invalid_sizes():
    print("Testing invalid sizes...")
    for bad in (0, 2):
        try:
            GridBuffers(size=bad)
        except ValueError:
            pass
        else:
            raise AssertionError(f"size={bad} should be rejected")
    buffers = GridBuffers()
    try:
        buffers.resize(0, 100)
    except ValueError:
        pass
    else:
        raise AssertionError("zero-width surface should be rejected")
    print("  ✓ invalid sizes raise ValueError")


def test_to_grid_mapping():
    print("Testing pixel to grid mapping...")
    buffers = GridBuffers(size=64, surface_size=(640, 640))
    assert buffers.to_grid(0, 0) == (0, 0)
    assert buffers.to_grid(160, 160) == (16, 16)
    assert buffers.to_grid(639.9, 639.9) == (63, 63)
    assert buffers.to_grid(640, 10) is None
    assert buffers.to_grid(-1, 10) is None

    buffers.resize(1280, 320)
    assert buffers.to_grid(160, 160) == (8, 32)
    print("  ✓ floor(px / width * N) with bounds rejection")


def test_propagate_matches_loop():
    print("Testing vectorized propagation against reference loop...")
    rng = np.random.default_rng(3)
    current = rng.standard_normal((10, 10))
    stale = rng.standard_normal((10, 10))

    expected = _loop_propagate(current, stale.copy(), 0.97)
    got = propagate(current, stale.copy(), 0.97)
    assert np.allclose(got, expected)
    print("  ✓ slice update == cell loop (stale next subtracted)")


def test_boundary_ring_untouched():
    print("Testing boundary ring...")
    buffers = GridBuffers(size=16, surface_size=(160, 160))
    rng = np.random.default_rng(5)
    for buf in (buffers.read(), buffers.write_target()):
        buf[:] = rng.standard_normal((16, 16))
    ring_a = buffers.read().copy()
    ring_b = buffers.write_target().copy()

    prop = WavePropagator(0.97)
    prop.step_n(buffers, 9)

    # After an odd number of ticks the arrays have swapped roles
    for before, after in ((ring_a, buffers.write_target()), (ring_b, buffers.read())):
        assert np.array_equal(before[0, :], after[0, :])
        assert np.array_equal(before[-1, :], after[-1, :])
        assert np.array_equal(before[:, 0], after[:, 0])
        assert np.array_equal(before[:, -1], after[:, -1])
    print("  ✓ outer ring never written")


def test_decay_without_impulses():
    print("Testing decay...")
    buffers = GridBuffers(size=32, surface_size=(320, 320))
    rng = np.random.default_rng(11)
    buffers.read()[1:-1, 1:-1] = rng.uniform(-100, 100, (30, 30))
    start = np.abs(buffers.read()).max()

    prop = WavePropagator(0.97)
    peaks = []
    for _ in range(20):
        grid = prop.step_n(buffers, 100)
        peaks.append(max(np.abs(grid).max(), np.abs(buffers.write_target()).max()))

    assert np.all(np.isfinite(buffers.read()))
    assert peaks[-1] < start * 1e-6, f"Should decay toward zero: {peaks[-1]}"
    # Envelope over 100-tick windows never grows
    assert all(b <= a for a, b in zip(peaks, peaks[1:]))
    print("  ✓ damped grid decays to zero")


def test_damping_validation():
    print("Testing damping bounds...")
    for bad in (0.0, 1.0, 1.2, -0.5):
        try:
            WavePropagator(bad)
        except ValueError:
            pass
        else:
            raise AssertionError(f"damping={bad} should be rejected")
    prop = WavePropagator()
    assert prop.damping == 0.97
    print("  ✓ damping must be in (0, 1)")


if __name__ == "__main__":
    print("\n=== Testing Grid and Propagator ===\n")

    test_swap_reuses_buffers()
    test_resize_idempotent()
    test_invalid_sizes()
    test_to_grid_mapping()
    test_propagate_matches_loop()
    test_boundary_ring_untouched()
    test_decay_without_impulses()
    test_damping_validation()

    print("\n✓ All tests passed!\n")
