"""Tests for schedule-driven node layout and phase durations."""

import numpy as np
import pytest

from phasenodes.core.types import Dx, Node, PolyInfo
from phasenodes.variables.phase_nodes import PhaseNodes, build_poly_infos


def make_phase_nodes(schedule, constant_in_contact=True, n_polys=2, n_dim=3):
    initial = Node(pos=np.zeros(n_dim), vel=np.zeros(n_dim))
    return PhaseNodes(initial, schedule, "phase_nodes", constant_in_contact, n_polys)


def test_build_poly_infos():
    infos = build_poly_infos([True, False, True], True, 2)

    assert infos == [
        PolyInfo(0, 0, 1, True),
        PolyInfo(1, 0, 2, False),
        PolyInfo(1, 1, 2, False),
        PolyInfo(2, 0, 1, True),
    ]


def test_build_poly_infos_inverted_polarity():
    infos = build_poly_infos([True, False], False, 3)

    assert [i.is_constant for i in infos] == [False, False, False, True]
    assert [i.phase for i in infos] == [0, 0, 0, 1]
    assert [i.poly_id_in_phase for i in infos] == [0, 1, 2, 0]


def test_invalid_schedule():
    with pytest.raises(ValueError):
        build_poly_infos([], True, 2)

    with pytest.raises(ValueError):
        build_poly_infos([True, False], True, 0)


@pytest.mark.parametrize(
    "schedule, n_polys, n_blocks",
    [
        ([True], 2, 1),
        ([False], 3, 4),
        ([True, False, True], 2, 3),
        ([False, True], 1, 2),
        ([True, False, True, False, True], 1, 3),
    ],
)
def test_rows(schedule, n_polys, n_blocks):
    nodes = make_phase_nodes(schedule, n_polys=n_polys)

    assert nodes.rows == n_blocks * 2 * 3
    assert nodes.rows == nodes.nodes.rows
    assert nodes.n_phases == len(schedule)


def test_constant_phase_collapses():
    nodes = make_phase_nodes([True, False, True], n_polys=2)
    nodes.set_values(np.random.default_rng(0).normal(size=nodes.rows))

    all_nodes = nodes.get_nodes()

    # polynomial 0 covers phase 0 (nodes 0, 1), polynomial 3 covers phase 2 (nodes 3, 4)
    for a, b in ((0, 1), (3, 4)):
        assert np.array_equal(all_nodes[a].pos, all_nodes[b].pos)
        assert np.array_equal(all_nodes[a].vel, all_nodes[b].vel)
    assert len(nodes.get_node_info(0)) == 2
    assert len(nodes.get_node_info(nodes.rows - 1)) == 2


def test_update_durations_partitions_phases():
    nodes = make_phase_nodes([True, False, True, False], n_polys=3)
    phase_durations = [0.3, 0.45, 0.2, 0.7]

    nodes.update_durations(phase_durations)

    sums = np.zeros(4)
    for info, d in zip(nodes.nodes.get_poly_infos(), nodes.durations):
        sums[info.phase] += d
    assert np.allclose(sums, phase_durations)
    assert np.isclose(nodes.total_time, sum(phase_durations))


def test_update_durations_wrong_length():
    nodes = make_phase_nodes([True, False])

    with pytest.raises(ValueError):
        nodes.update_durations([0.5])


def test_phase_of_time():
    nodes = make_phase_nodes([True, False, True], n_polys=2)
    nodes.update_durations([0.3, 0.4, 0.3])

    assert nodes.get_phase_of(0.1) == 0
    assert nodes.get_phase_of(0.35) == 1
    assert nodes.get_phase_of(0.65) == 1
    assert nodes.get_phase_of(1.0) == 2


def test_phase_duration_derivative_velocity_correction():
    """
    Straight line at unit speed through a phase split into two polynomials.

    Only the second polynomial shifts its start when the phase is stretched,
    which adds -1/2 * velocity to its derivative.
    """
    nodes = make_phase_nodes([False], n_polys=2, n_dim=1)
    nodes.update_durations([1.0])
    nodes.set_values(np.array([0.0, 1.0, 0.5, 1.0, 1.0, 1.0]))

    first = nodes.get_derivative_of_pos_wrt_phase_duration(0.25)
    second = nodes.get_derivative_of_pos_wrt_phase_duration(0.75)

    assert np.allclose(first, [-0.25])
    assert np.allclose(second, [-0.75])
    assert np.allclose(second - first, -0.5 * nodes.get_point(0.75).vel)


@pytest.mark.parametrize("t", [0.1, 0.3, 0.6, 0.9])
def test_phase_duration_derivative_matches_finite_difference(t):
    nodes = make_phase_nodes([False], n_polys=2, n_dim=3)
    nodes.update_durations([1.0])
    nodes.set_values(np.random.default_rng(5).normal(size=nodes.rows))
    h = 1e-6

    nodes.update_durations([1.0 + h])
    plus = nodes.get_point(t).pos
    nodes.update_durations([1.0 - h])
    minus = nodes.get_point(t).pos
    nodes.update_durations([1.0])

    fd = (plus - minus) / (2 * h)

    assert np.allclose(nodes.get_derivative_of_pos_wrt_phase_duration(t), fd, atol=1e-5)


def test_phase_duration_derivative_in_later_phase():
    """Earlier phases are fixed, so only the active phase's split matters."""
    nodes = make_phase_nodes([True, False], n_polys=2, n_dim=2)
    nodes.update_durations([0.5, 1.0])
    nodes.set_values(np.random.default_rng(6).normal(size=nodes.rows))
    t, h = 1.2, 1e-6

    nodes.update_durations([0.5, 1.0 + h])
    plus = nodes.get_point(t).pos
    nodes.update_durations([0.5, 1.0 - h])
    minus = nodes.get_point(t).pos
    nodes.update_durations([0.5, 1.0])

    fd = (plus - minus) / (2 * h)

    assert np.allclose(nodes.get_derivative_of_pos_wrt_phase_duration(t), fd, atol=1e-5)


def test_delegation():
    nodes = make_phase_nodes([False], n_polys=1)
    nodes.update_durations([1.0])

    assert nodes.get_jacobian(0.5, Dx.POS).shape == (3, nodes.rows)
    assert nodes.does_var_affect_current_state("phase_nodes", 0.5)
    assert np.allclose(nodes.get_point(0.5).pos, 0.0)


def test_node_values_operations_are_delegated():
    nodes = make_phase_nodes([True, False, True], n_polys=2)

    assert nodes.n_polys == 4
    assert nodes.n_nodes == 5
    assert nodes.get_poly_infos() == nodes.nodes.get_poly_infos()
    assert nodes.get_opt_indices(3) == nodes.nodes.get_opt_indices(3)
    assert nodes.get_opt_index(2, Dx.POS, 1) == 7

    nodes.set_durations([0.1, 0.2, 0.2, 0.3])
    assert np.allclose(nodes.durations, [0.1, 0.2, 0.2, 0.3])

    jac = nodes.get_jacobian_of_poly(1, 0.1, Dx.POS)
    assert np.allclose(jac.toarray(), nodes.get_jacobian(0.2, Dx.POS).toarray())


def test_zero_length_final_phase_evaluates_previous_phase_end():
    nodes = make_phase_nodes([True, False, True], n_polys=2)
    nodes.set_values(np.random.default_rng(8).normal(size=nodes.rows))

    nodes.update_durations([0.5, 0.5, 0.0])
    point = nodes.get_point(1.0)

    # polynomial 2 ends the swing phase at node 3
    assert np.allclose(point.pos, nodes.get_nodes()[3].pos)
    assert nodes.get_phase_of(1.0) == 1
