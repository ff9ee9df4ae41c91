"""
Tests for viewtour.core module.

These tests verify the data model, geometry helpers and error kinds.
"""

import math

import pytest
import numpy as np


class TestGeometry:
    """Tests for distance utilities."""

    def test_distance_3d(self):
        """Test Euclidean distance in 3D."""
        from viewtour.core.geometry import distance

        assert distance((0, 0, 0), (3, 4, 0)) == pytest.approx(5.0)
        assert distance((1, 2, 3), (1, 2, 3)) == 0.0
        assert distance((0, 0, 0), (1, 1, 1)) == pytest.approx(math.sqrt(3))

    def test_distance_is_symmetric(self):
        """Test that distance doesn't depend on argument order."""
        from viewtour.core.geometry import distance

        a, b = (0.5, -2.0, 7.0), (3.0, 1.0, -1.0)
        assert distance(a, b) == distance(b, a)

    def test_pairwise_distances(self):
        """Test the pairwise distance matrix."""
        from viewtour.core.geometry import pairwise_distances

        d = pairwise_distances([(0, 0, 0), (1, 0, 0), (1, 1, 0)])

        assert d.shape == (3, 3)
        np.testing.assert_allclose(np.diag(d), 0.0)
        np.testing.assert_allclose(d, d.T)
        assert d[0, 2] == pytest.approx(math.sqrt(2))

    def test_as_position_rejects_wrong_length(self):
        """Test that positions need exactly three coordinates."""
        from viewtour.core.geometry import as_position

        with pytest.raises(ValueError):
            as_position((1.0, 2.0))


class TestViewpoint:
    """Tests for Viewpoint class."""

    def test_viewpoint_creation(self):
        """Test basic viewpoint creation."""
        from viewtour.core.model import Viewpoint

        vp = Viewpoint("v0", (1, 2, 3), is_mandatory=True, precision={"a1": 0.5})

        assert vp.position == (1.0, 2.0, 3.0)
        assert vp.is_mandatory
        assert vp.angles == ["a1"]

    def test_mandatory_defaults_false(self):
        """Test that the mandatory flag defaults to False."""
        from viewtour.core.model import Viewpoint

        assert not Viewpoint("v1", (0, 0, 0)).is_mandatory

    def test_angle_precision_missing(self):
        """Test that unknown angles score zero precision."""
        from viewtour.core.model import Viewpoint

        vp = Viewpoint("v0", (0, 0, 0), precision={"a1": 0.7})

        assert vp.angle_precision("a1") == 0.7
        assert vp.angle_precision("zz") == 0.0

    def test_frozen(self):
        """Test that viewpoints are immutable."""
        from dataclasses import FrozenInstanceError
        from viewtour.core.model import Viewpoint

        vp = Viewpoint("v0", (0, 0, 0))
        with pytest.raises(FrozenInstanceError):
            vp.is_mandatory = True


class TestSamplePoint:
    """Tests for SamplePoint class."""

    def test_first_angle_for(self):
        """Test that the first covering pair of a viewpoint wins."""
        from viewtour.core.model import SamplePoint, covering_pairs

        sp = SamplePoint("s0", (0, 0, 0), covering_pairs([("v1", "a2"), ("v2", "a1"), ("v1", "a1")]))

        assert sp.first_angle_for("v1") == "a2"
        assert sp.first_angle_for("v2") == "a1"
        assert sp.first_angle_for("v9") is None


class TestProblemInstance:
    """Tests for ProblemInstance class."""

    def test_square_instance(self):
        """Test lookups on the square instance."""
        from viewtour.io.synthetic import generate_square_instance

        instance = generate_square_instance()

        assert instance.num_viewpoints == 4
        assert instance.num_samples == 2
        assert instance.viewpoint_ids == ["v0", "v1", "v2", "v3"]
        assert instance.index_of("v2") == 2
        assert instance.viewpoint("v3").position == (0.0, 1.0, 0.0)
        assert [vp.id for vp in instance.mandatory_viewpoints] == ["v0"]

    def test_adjacency_read_only(self):
        """Test that the adjacency matrix can't be modified."""
        from viewtour.io.synthetic import generate_square_instance

        instance = generate_square_instance()

        with pytest.raises(ValueError):
            instance.adjacency[0, 0] = True

    def test_shape_mismatch(self):
        """Test that a mis-sized matrix is rejected."""
        from viewtour.core.errors import ShapeMismatchError
        from viewtour.core.model import ProblemInstance, Viewpoint

        viewpoints = (Viewpoint("a", (0, 0, 0), True), Viewpoint("b", (1, 0, 0)))

        with pytest.raises(ShapeMismatchError) as excinfo:
            ProblemInstance(viewpoints, (), np.zeros((3, 3), dtype=bool))

        assert excinfo.value.kind == "ShapeMismatch"
        assert isinstance(excinfo.value, ValueError)

    def test_unknown_viewpoint(self):
        """Test that unknown ids raise UnknownViewpointError."""
        from viewtour.core.errors import UnknownViewpointError
        from viewtour.io.synthetic import generate_square_instance

        instance = generate_square_instance()

        with pytest.raises(UnknownViewpointError):
            instance.viewpoint("nope")
        with pytest.raises(KeyError):
            instance.index_of("nope")


class TestErrors:
    """Tests for the error hierarchy."""

    def test_kinds_are_distinct(self):
        """Test that every error carries a distinguishable kind."""
        from viewtour.core import errors

        kinds = [
            errors.ShapeMismatchError((2, 3), 2).kind,
            errors.MissingMandatoryError().kind,
            errors.AmbiguousMandatoryError(["a", "b"]).kind,
            errors.TimeBudgetExceededError(2.0, 1.0).kind,
            errors.InstanceFormatError("bad").kind,
            errors.UnknownViewpointError("x").kind,
        ]

        assert len(set(kinds)) == len(kinds)

    def test_messages(self):
        """Test human readable messages."""
        from viewtour.core.errors import AmbiguousMandatoryError, InstanceFormatError

        err = AmbiguousMandatoryError(["v0", "v3"])
        assert "v3" in err.message
        assert str(err).startswith("AmbiguousMandatory:")

        err = InstanceFormatError("missing field", "viewpoints[2]")
        assert err.message == "viewpoints[2]: missing field"

    def test_all_derive_from_base(self):
        """Test that all errors can be caught with TourPlanningError."""
        from viewtour.core import errors

        for err in [
            errors.MissingMandatoryError(),
            errors.TimeBudgetExceededError(1.0, 0.5),
            errors.UnknownViewpointError("x"),
        ]:
            assert isinstance(err, errors.TourPlanningError)
