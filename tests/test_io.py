"""
Tests for viewtour.io module.

These tests verify instance decoding, solution encoding and the synthetic
instance generators.
"""

import io
import json

import pytest
import numpy as np


@pytest.fixture
def square_document():
    """Square instance as a JSON document."""
    from viewtour.io.synthetic import generate_square_instance
    return generate_square_instance().to_dict()


class TestParseInstance:
    """Tests for parse_instance()."""

    def test_round_trip_document(self, square_document):
        """Test that an encoded instance decodes to the same content."""
        from viewtour.io.decoder import parse_instance
        from viewtour.io.synthetic import generate_square_instance

        original = generate_square_instance()
        decoded = parse_instance(square_document)

        assert decoded.viewpoint_ids == original.viewpoint_ids
        assert decoded.viewpoints == original.viewpoints
        assert decoded.sample_points == original.sample_points
        np.testing.assert_array_equal(decoded.adjacency, original.adjacency)

    def test_list_coordinates_and_pair_objects(self):
        """Test the alternative coordinate and pair layouts."""
        from viewtour.io.decoder import parse_instance

        data = {
            "viewpoints": [
                {"id": "m", "coordinates": [0, 0, 0], "is_mandatory": True},
                {"id": "a", "coordinates": [1, 2, 3], "precision": {"x": 0.4}},
            ],
            "sample_points": [
                {"id": "s", "coordinates": [0, 0, 1],
                 "coverage_pairs": [{"viewpoint": "a", "angle": "x"}]},
            ],
            "collision_matrix": [[0, 1], [1, 0]],
        }

        instance = parse_instance(data)

        assert instance.viewpoint("a").position == (1.0, 2.0, 3.0)
        assert instance.viewpoint("a").precision == {"x": 0.4}
        assert instance.sample_points[0].covering_pairs[0].angle_id == "x"

    def test_mandatory_defaults_false(self, square_document):
        """Test that a missing mandatory flag means not mandatory."""
        from viewtour.io.decoder import parse_instance

        del square_document["viewpoints"][1]["is_mandatory"]

        assert not parse_instance(square_document).viewpoint("v1").is_mandatory

    def test_nonzero_entries_are_edges(self, square_document):
        """Test that any nonzero matrix entry permits the edge."""
        from viewtour.io.decoder import parse_instance

        square_document["collision_matrix"][1][0] = 5

        assert parse_instance(square_document).adjacency[1, 0]

    @pytest.mark.parametrize("key", ["viewpoints", "sample_points", "collision_matrix"])
    def test_missing_section(self, square_document, key):
        """Test that each top-level section is required."""
        from viewtour.core.errors import InstanceFormatError
        from viewtour.io.decoder import parse_instance

        del square_document[key]

        with pytest.raises(InstanceFormatError):
            parse_instance(square_document)

    def test_empty_viewpoints(self, square_document):
        """Test that an empty viewpoint list is rejected."""
        from viewtour.core.errors import InstanceFormatError
        from viewtour.io.decoder import parse_instance

        square_document["viewpoints"] = []

        with pytest.raises(InstanceFormatError, match="empty"):
            parse_instance(square_document)

    def test_malformed_coordinates(self, square_document):
        """Test that coordinates need three finite numbers."""
        from viewtour.core.errors import InstanceFormatError
        from viewtour.io.decoder import parse_instance

        square_document["viewpoints"][2]["coordinates"] = [1, 2]
        with pytest.raises(InstanceFormatError, match="v2"):
            parse_instance(square_document)

        square_document["viewpoints"][2]["coordinates"] = {"x": 1, "y": "nan", "z": 0}
        with pytest.raises(InstanceFormatError):
            parse_instance(square_document)

    def test_negative_precision(self, square_document):
        """Test that precision scores must be non-negative."""
        from viewtour.core.errors import InstanceFormatError
        from viewtour.io.decoder import parse_instance

        square_document["viewpoints"][1]["precision"]["a1"] = -0.1

        with pytest.raises(InstanceFormatError):
            parse_instance(square_document)

    def test_duplicate_ids(self, square_document):
        """Test that viewpoint ids must be unique."""
        from viewtour.core.errors import InstanceFormatError
        from viewtour.io.decoder import parse_instance

        square_document["viewpoints"][3]["id"] = "v1"

        with pytest.raises(InstanceFormatError, match="duplicate"):
            parse_instance(square_document)

    def test_unknown_viewpoint_in_pair(self, square_document):
        """Test that covering pairs must reference known viewpoints."""
        from viewtour.core.errors import InstanceFormatError
        from viewtour.io.decoder import parse_instance

        square_document["sample_points"][0]["coverage_pairs"].append(["v9", "a1"])

        with pytest.raises(InstanceFormatError, match="v9"):
            parse_instance(square_document)

    def test_unknown_angle_warns(self, square_document, caplog):
        """Test that angles without a precision score only log a warning."""
        from viewtour.io.decoder import parse_instance

        square_document["sample_points"][0]["coverage_pairs"].append(["v1", "a9"])

        with caplog.at_level("WARNING", logger="viewtour"):
            instance = parse_instance(square_document)

        assert instance.num_samples == 2
        assert "a9" in caplog.text

    def test_matrix_shape_mismatch(self, square_document):
        """Test that mis-sized and ragged matrices are rejected."""
        from viewtour.core.errors import ShapeMismatchError
        from viewtour.io.decoder import parse_instance

        square_document["collision_matrix"] = [[0, 1, 0], [1, 0, 1], [0, 1, 0]]
        with pytest.raises(ShapeMismatchError):
            parse_instance(square_document)

        square_document["collision_matrix"] = [[0, 1, 0, 1], [1, 0], [0, 1, 0, 1], [1, 0, 1, 0]]
        with pytest.raises(ShapeMismatchError) as excinfo:
            parse_instance(square_document)
        assert excinfo.value.shape == (4, 2)

    @pytest.mark.parametrize("value", [None, "true", "1", float("nan"), float("inf"), [1]])
    def test_matrix_bad_entry(self, square_document, value):
        """Test that non-numeric or non-finite entries name their cell."""
        from viewtour.core.errors import InstanceFormatError, ShapeMismatchError
        from viewtour.io.decoder import parse_instance

        square_document["collision_matrix"][0][1] = value

        with pytest.raises(InstanceFormatError, match=r"\[0\]\[1\]") as excinfo:
            parse_instance(square_document)
        assert not isinstance(excinfo.value, ShapeMismatchError)

    def test_matrix_booleans(self, square_document):
        """Test that JSON booleans are accepted as matrix entries."""
        from viewtour.io.decoder import parse_instance

        square_document["collision_matrix"] = [
            [bool(v) for v in row] for row in square_document["collision_matrix"]
        ]

        instance = parse_instance(square_document)

        assert instance.adjacency[0, 1]
        assert not instance.adjacency[1, 0]

    def test_matrix_not_a_list(self, square_document):
        """Test that a matrix that isn't a list of rows is rejected."""
        from viewtour.core.errors import InstanceFormatError
        from viewtour.io.decoder import parse_instance

        square_document["collision_matrix"] = {"0": [0, 1]}

        with pytest.raises(InstanceFormatError, match="collision_matrix"):
            parse_instance(square_document)

    @pytest.mark.parametrize("value", ["false", "true", 1, 0, None])
    def test_mandatory_flag_must_be_boolean(self, square_document, value):
        """Test that only JSON booleans are accepted for is_mandatory."""
        from viewtour.core.errors import InstanceFormatError
        from viewtour.io.decoder import parse_instance

        square_document["viewpoints"][1]["is_mandatory"] = value

        with pytest.raises(InstanceFormatError, match="is_mandatory"):
            parse_instance(square_document)


class TestReadInstance:
    """Tests for read_instance() and load_instance()."""

    def test_read_stream(self, square_document):
        """Test decoding from a text stream."""
        from viewtour.io.decoder import read_instance

        instance = read_instance(io.StringIO(json.dumps(square_document)), name="square")

        assert instance.name == "square"
        assert instance.num_viewpoints == 4

    def test_invalid_json(self):
        """Test that invalid JSON raises InstanceFormatError."""
        from viewtour.core.errors import InstanceFormatError
        from viewtour.io.decoder import read_instance

        with pytest.raises(InstanceFormatError, match="invalid JSON"):
            read_instance(io.StringIO("{not json"))

    def test_invalid_utf8_file(self, tmp_path):
        """Test that undecodable bytes raise InstanceFormatError."""
        from viewtour.core.errors import InstanceFormatError
        from viewtour.io.decoder import load_instance

        path = tmp_path / "binary.json"
        path.write_bytes(b"\xff\xfe{}")

        with pytest.raises(InstanceFormatError, match="UTF-8"):
            load_instance(path)

    def test_load_file(self, tmp_path, square_document):
        """Test loading from a file path."""
        from viewtour.io.decoder import load_instance

        path = tmp_path / "square.json"
        path.write_text(json.dumps(square_document))

        instance = load_instance(path)

        assert instance.name == "square"
        assert instance.mandatory_viewpoints[0].id == "v0"

    def test_load_missing_file(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        from viewtour.io.decoder import load_instance

        with pytest.raises(FileNotFoundError):
            load_instance(tmp_path / "missing.json")

    def test_load_stdin(self, monkeypatch, square_document):
        """Test that '-' reads from stdin."""
        from viewtour.io.decoder import load_instance

        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(square_document)))

        instance = load_instance("-")

        assert instance.name == "stdin"
        assert instance.num_samples == 2


class TestEncoder:
    """Tests for solution encoding."""

    @pytest.fixture
    def result(self):
        from viewtour.io.synthetic import generate_square_instance
        from viewtour.optimization.runner import plan_tour
        return plan_tour(generate_square_instance())

    def test_document_layout(self, result):
        """Test metadata, sequence order and sorted angles."""
        from viewtour.io.encoder import encode_solution

        document = encode_solution(result.solution, result.validation)

        assert document["metadata"]["num_viewpoints"] == 4
        assert document["metadata"]["objective"]["distance"] == pytest.approx(4.0)
        assert document["metadata"]["objective"]["precision"] == pytest.approx(2.0)
        assert [entry["id"] for entry in document["sequence"]] == ["v0", "v1", "v2", "v3"]
        assert document["sequence"][0]["angles"] == []
        assert document["sequence"][3]["angles"] == ["a1", "a3"]
        assert document["validation"]["valid"] is True

    def test_without_validation(self, result):
        """Test that the validation block can be left out."""
        from viewtour.config.settings import OutputConfig
        from viewtour.io.encoder import encode_solution

        document = encode_solution(
            result.solution, result.validation, OutputConfig(include_validation=False),
        )

        assert "validation" not in document

    def test_decimals(self, result):
        """Test rounding of objective components."""
        from viewtour.config.settings import OutputConfig
        from viewtour.io.encoder import encode_solution

        result.solution.total_distance = 4.123456
        document = encode_solution(result.solution, config=OutputConfig(decimals=2))

        assert document["metadata"]["objective"]["distance"] == 4.12

    def test_error_block(self):
        """Test that failed planning adds an error block."""
        from viewtour.core.model import ProblemInstance, SamplePoint, Viewpoint
        from viewtour.io.encoder import encode_result
        from viewtour.optimization.runner import plan_tour

        instance = ProblemInstance(
            (Viewpoint("a", (0, 0, 0)),),
            (SamplePoint("s", (0, 0, 0)),),
            np.zeros((1, 1), dtype=bool),
        )

        document = encode_result(plan_tour(instance))

        assert document["error"]["code"] == "MissingMandatory"
        assert document["sequence"] == []

    def test_dump_and_save(self, result, tmp_path):
        """Test that written documents parse back as JSON."""
        from viewtour.io.encoder import dump_document, encode_result, save_document

        document = encode_result(result)
        stream = io.StringIO()
        dump_document(document, stream)
        path = tmp_path / "solution.json"
        save_document(document, path)

        assert stream.getvalue().endswith("\n")
        assert json.loads(stream.getvalue()) == document
        assert json.loads(path.read_text()) == document


class TestSynthetic:
    """Tests for synthetic instance generators."""

    def test_square_modes(self):
        """Test both square variants."""
        from viewtour.io.synthetic import generate_square_instance

        cycle = generate_square_instance('cycle')
        isolated = generate_square_instance('isolated')

        assert cycle.adjacency[0, 1] and not cycle.adjacency[1, 0]
        assert not (isolated.adjacency & ~np.eye(4, dtype=bool)).any()
        assert cycle.sample_points == isolated.sample_points

    def test_square_unknown_mode(self):
        """Test that unknown modes are rejected."""
        from viewtour.io.synthetic import generate_square_instance

        with pytest.raises(ValueError, match="Unknown square mode"):
            generate_square_instance('spiral')

    def test_random_reproducible(self):
        """Test that a seed reproduces the same instance."""
        from viewtour.io.synthetic import generate_random_instance

        a = generate_random_instance(10, 12, seed=3)
        b = generate_random_instance(10, 12, seed=3)

        assert a.viewpoints == b.viewpoints
        assert a.sample_points == b.sample_points
        np.testing.assert_array_equal(a.adjacency, b.adjacency)

    def test_random_structure(self):
        """Test the mandatory viewpoint, pairs and diagonal."""
        from viewtour.io.synthetic import generate_random_instance

        instance = generate_random_instance(8, 20, pairs_per_sample=3, seed=1)

        assert [vp.id for vp in instance.mandatory_viewpoints] == ["v0"]
        assert not np.diag(instance.adjacency).any()
        for sample in instance.sample_points:
            vp_ids = [p.viewpoint_id for p in sample.covering_pairs]
            assert len(vp_ids) == 3
            assert len(set(vp_ids)) == 3
            assert "v0" not in vp_ids

    def test_random_invalid_arguments(self):
        """Test argument checks."""
        from viewtour.io.synthetic import generate_random_instance

        with pytest.raises(ValueError):
            generate_random_instance(num_viewpoints=1)
        with pytest.raises(ValueError):
            generate_random_instance(num_viewpoints=4, pairs_per_sample=5)
