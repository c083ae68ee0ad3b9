import io

import numpy as np
import pytest

from kitaevgap.kitaev import (
    GAP_CEILING,
    KitaevPoint,
    build_hoo,
    build_hop,
    build_hpo,
    build_hpp,
    main,
    scan_phase_space,
    smallest_positive,
    write_gap_table,
)

PARAMS = dict(t=0.5, delta=0.5, mu=1.0, alpha=3.0, beta=2.0)


def test_point_defaults_follow_source():
    point = KitaevPoint()
    assert point.beta == 100.0
    assert point.t == 0.5
    assert point.delta == 0.5


def test_describe_format():
    point = KitaevPoint(alpha=1.0, mu=2.0, gap=0.25)
    assert point.describe() == "\n[a,m,GAP] = [1.00000,2.00000,0.25000]"


def test_hpp_shape_and_diagonal():
    h = build_hpp(3, 3, **PARAMS)
    assert h.data.shape == (18, 18)
    assert h.data[0, 0] == pytest.approx(-PARAMS["mu"] + 4 * PARAMS["t"])
    assert h.data[9, 9] == pytest.approx(PARAMS["mu"] - 4 * PARAMS["t"])
    assert h.data[0, 9] == 0


def test_hpp_nearest_neighbour_terms():
    h = build_hpp(3, 3, **PARAMS)
    assert h.data[0, 1] == pytest.approx(-PARAMS["t"])
    assert h.data[9, 10] == pytest.approx(PARAMS["t"])
    assert h.data[0, 1 + 9] == pytest.approx(PARAMS["delta"])
    assert h.data[0, 3 + 9] == pytest.approx(1j * PARAMS["delta"])


def test_hpp_odd_lattice_is_hermitian():
    data = build_hpp(3, 3, **PARAMS).data
    np.testing.assert_allclose(data, data.conj().T)
    assert data[3 + 9, 0] == pytest.approx(np.conj(data[0, 3 + 9]))


def test_hpp_periodic_wrap_matches_direct_neighbour():
    h = build_hpp(3, 3, **PARAMS)
    # site 2 is one step to the left of site 0 through the boundary
    assert h.data[0, 2] == pytest.approx(h.data[0, 1])


def test_hpo_is_hermitian():
    data = build_hpo(3, 2, **PARAMS).data
    assert data.shape == (12, 12)
    np.testing.assert_allclose(data, data.conj().T)
    assert data[1, 0] == pytest.approx(np.conj(data[0, 1]))


def test_hpo_open_direction_does_not_wrap():
    h = build_hpo(1, 3, **PARAMS)
    assert abs(h.data[0, 2]) < abs(h.data[0, 1])
    assert h.data[0, 1] == pytest.approx(-PARAMS["t"])


def test_hop_y_offset_is_not_folded():
    h_hop = build_hop(1, 3, **PARAMS)
    h_hpp = build_hpp(1, 3, **PARAMS)
    assert h_hpp.data[0, 2] == pytest.approx(-PARAMS["t"])
    assert abs(h_hop.data[0, 2]) < abs(h_hpp.data[0, 2])


def test_hoo_sets_only_first_site():
    h = build_hoo(2, 2, **PARAMS)
    assert h.data.shape == (8, 8)
    assert np.count_nonzero(h.data) == 2
    assert h.data[0, 0] == pytest.approx(-PARAMS["mu"] + 2)
    assert h.data[4, 4] == pytest.approx(PARAMS["mu"] - 2)


@pytest.mark.parametrize("builder", [build_hpp, build_hpo, build_hop, build_hoo])
def test_builders_reject_empty_lattice(builder):
    with pytest.raises(ValueError):
        builder(0, 3, **PARAMS)


def test_smallest_positive_picks_minimum():
    assert smallest_positive([-1.0, 0.5, 0.2, 3.0], GAP_CEILING) == 0.2


def test_smallest_positive_falls_back_to_ceiling():
    assert smallest_positive([-1.0, 0.0, -3.0], 7.0) == 7.0
    assert smallest_positive([8.0, 9.0], 7.0) == 7.0
    assert smallest_positive([], GAP_CEILING) == GAP_CEILING


def test_scan_collects_capped_grid():
    seen = []
    points = scan_phase_space(
        2, 2, on_point=lambda point, error, progress: seen.append((point, error, progress))
    )
    assert len(points) == 4
    assert [entry[0] for entry in seen] == points
    assert [entry[2] for entry in seen] == [0.0, 25.0, 50.0, 75.0]
    assert all(entry[1] in (0, -1) for entry in seen)
    for point in points:
        assert 0.0 < point.gap <= GAP_CEILING
        assert point.alpha < 5.0
        assert point.mu < 5.0


def test_scan_walks_downward():
    points = scan_phase_space(2, 2)
    alphas = [p.alpha for p in points]
    assert alphas == sorted(alphas, reverse=True)
    assert points[0].mu > points[1].mu


def test_scan_rejects_bad_steps():
    with pytest.raises(ValueError):
        scan_phase_space(2, 0)


def test_write_gap_table_layout():
    points = [KitaevPoint(gap=g) for g in (1.0, 2.0, 3.0, 4.0)]
    out = io.StringIO()
    write_gap_table(points, 2, out)
    assert out.getvalue() == "4 3 \n2 1 "


def test_main_writes_table(tmp_path, capsys):
    target = tmp_path / "gap.dat"
    assert main(["--length", "2", "--steps", "2", "--output", str(target)]) == 0
    lines = target.read_text().split("\n")
    assert len(lines) == 2
    assert all(len(line.split()) == 2 for line in lines)
    assert "[a,m,GAP]" in capsys.readouterr().out


def test_main_rejects_bad_length(tmp_path):
    with pytest.raises(SystemExit):
        main(["--length", "0", "--output", str(tmp_path / "gap.dat")])