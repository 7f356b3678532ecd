#!/usr/bin/env python3
"""
Cut list editing - click to add, click near a cut to remove
"""

from stripcutter.cuts import normalize_cuts, toggle_cut


def test_toggle_adds_rounded_cut_in_order():
    assert toggle_cut([100, 300], 199.6) == [100, 200, 300]


def test_toggle_removes_nearby_cut():
    assert toggle_cut([100, 200, 300], 205) == [100, 300]


def test_toggle_tolerance_is_strict():
    assert toggle_cut([100], 110) == [100, 110]
    assert toggle_cut([100], 109.9) == []


def test_toggle_respects_custom_tolerance():
    # A zoomed-out view passes a wider hit distance
    assert toggle_cut([100], 130, tolerance=40) == []


def test_toggle_clamps_to_height():
    assert toggle_cut([], 512.4, height=500) == [500]
    assert toggle_cut([], -3, height=500) == [0]


def test_normalize_cuts():
    assert normalize_cuts([30, 10.4, 30, -5, 999], height=100) == [0, 10, 30, 100]
    assert normalize_cuts([], height=100) == []
