from hansard_digest.parsing.identifiers import (
    SyntheticIds,
    last_path_segment,
    resolve_identifier,
    resolve_speaker_id,
)


def test_last_path_segment_keeps_final_component():
    assert last_path_segment("uk.org.publicwhip/debate/2024-05-01a.100.1") == "2024-05-01a.100.1"
    assert last_path_segment("plain") == "plain"
    assert last_path_segment("trailing/") is None
    assert last_path_segment("") is None
    assert last_path_segment(None) is None


def test_resolve_identifier_prefers_own_attribute():
    synthetic = SyntheticIds()

    assert resolve_identifier({"id": "a/b/own"}, "major", synthetic, inherited="parent") == "own"
    assert synthetic.counter == 0


def test_resolve_identifier_falls_back_to_inherited_then_synthetic():
    synthetic = SyntheticIds()

    assert resolve_identifier({}, "speech", synthetic, inherited="parent") == "parent"
    assert resolve_identifier({}, "speech", synthetic) == "speech_1"
    assert resolve_identifier({"id": ""}, "minor", synthetic) == "minor_2"


def test_synthetic_ids_never_repeat_across_labels():
    synthetic = SyntheticIds()

    minted = [synthetic.next(label) for label in ("oral", "major", "oral", "minor")]

    assert minted == ["oral_1", "major_2", "oral_3", "minor_4"]


def test_synthetic_ids_carry_their_scope():
    synthetic = SyntheticIds(scope="2024-05-01a.")

    assert resolve_identifier({"id": "a/b/own"}, "minor", synthetic) == "own"
    assert resolve_identifier({}, "minor", synthetic) == "2024-05-01a.minor_1"


def test_resolve_speaker_id():
    assert resolve_speaker_id({"person_id": "uk.org.publicwhip/person/25000"}) == "25000"
    assert resolve_speaker_id({}) is None
