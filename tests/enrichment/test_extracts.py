from hansard_digest.core.types import DebateRecord, Speech
from hansard_digest.enrichment import enrich_debate, extract_square_brackets, find_proposing_minister


def make_speech(content, speaker_id=None):
    return Speech(speaker_id=speaker_id, speaker_name="Member", content=content)


def test_bracketed_annotations_are_extracted_in_order():
    speeches = [
        make_speech("He said [loudly] that [the bill] failed"),
        make_speech("No annotations here"),
        make_speech("[  Interruption.  ]\nOrder! [Laughter.]"),
    ]

    assert extract_square_brackets(speeches) == ["loudly", "the bill", "Interruption.", "Laughter."]


def test_brackets_do_not_span_speeches():
    speeches = [make_speech("An open [bracket"), make_speech("closed] later")]

    assert extract_square_brackets(speeches) == []


def test_minister_is_the_speaker_after_the_cue():
    speeches = [
        make_speech("I call the Minister", speaker_id="speaker"),
        make_speech("Thank you", speaker_id="X"),
        make_speech("I CALL THE MINISTER again", speaker_id="speaker"),
        make_speech("Later", speaker_id="Y"),
    ]

    assert find_proposing_minister(speeches) == "X"


def test_minister_is_absent_when_cue_is_last_or_missing():
    assert find_proposing_minister([make_speech("Opening", "A"), make_speech("I call the Minister.", "B")]) is None
    assert find_proposing_minister([make_speech("Nothing to see", "A")]) is None
    assert find_proposing_minister([]) is None


def test_enrichment_is_pure_and_repeatable():
    record = DebateRecord(
        id="d1",
        title="Title",
        type="Type",
        speaker_ids=("S", "X"),
        speeches=(
            make_speech("I call the Minister [Interruption.]", "S"),
            make_speech("Thank you", "X"),
        ),
    )

    first = enrich_debate(record)
    second = enrich_debate(record)

    assert first == second
    assert first.record is record
    assert first.extracts == ("Interruption.",)
    assert first.proposing_minister == "X"
    assert first.to_dict()["speeches"][1] == {
        "speaker_id": "X",
        "speaker_name": "Member",
        "content": "Thank you",
        "time": "00:00",
    }


def test_enrichment_without_matches():
    enriched = enrich_debate(DebateRecord(id="d1", title="T", type="T"))

    assert enriched.extracts == ()
    assert enriched.proposing_minister is None
