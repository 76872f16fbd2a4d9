from __future__ import annotations

from hansard_digest.parsing import (
    DebateSegmenter,
    TreeNode,
    build_tree,
    chamber_profile,
    parse_debates,
    segment_debates,
)
from hansard_digest.parsing.identifiers import SyntheticIds
from hansard_digest.parsing.segmenter import FirstSpeech


def heading(kind, text, **attributes):
    return TreeNode(kind, attributes, text)


def speech(*paragraphs, **attributes):
    return TreeNode("speech", attributes, "", tuple(TreeNode("p", {}, text) for text in paragraphs))


def sitting(*children):
    return TreeNode("publicwhip", {}, "", children)


def contents(record):
    return [item.content for item in record.speeches]


def test_major_heading_continues_debate_when_no_type_is_open():
    root = sitting(
        heading("major-heading", "Topic", id="uk.org.publicwhip/debate/2024-05-01a.10.0"),
        speech("S1"),
        speech("S2"),
    )

    debates = segment_debates(root)

    assert len(debates) == 1
    assert debates[0].id == "2024-05-01a.10.0"
    assert debates[0].title == "Topic"
    assert debates[0].type == "Topic"
    assert contents(debates[0]) == ["S1", "S2"]


def test_second_major_heading_splits_debates():
    root = sitting(
        heading("major-heading", "T1", id="m1"),
        speech("S1"),
        heading("major-heading", "T2", id="m2"),
        speech("S2"),
    )

    debates = segment_debates(root)

    assert [(debate.id, debate.type) for debate in debates] == [("m1", "T1"), ("m2", "T2")]
    assert contents(debates[0]) == ["S1"]
    assert contents(debates[1]) == ["S2"]


def test_minor_heading_always_splits():
    root = sitting(speech("S1"), heading("minor-heading", "M"), speech("S2"))

    debates = segment_debates(root)

    assert len(debates) == 2
    assert debates[0].id == "speech_1"
    assert debates[0].title == "No Title"
    assert debates[0].type == "No Subtitle"
    assert contents(debates[0]) == ["S1"]
    assert debates[1].id == "minor_2"
    assert debates[1].title == "M"
    assert debates[1].type == ""
    assert contents(debates[1]) == ["S2"]


def test_minor_heading_inherits_running_type():
    root = sitting(
        heading("major-heading", "Business", id="m1"),
        heading("minor-heading", "First item", id="n1"),
        speech("S1"),
        heading("minor-heading", "Second item", id="n2"),
        speech("S2"),
    )

    debates = segment_debates(root)

    # the major heading opens nothing, so no empty debate precedes the minors
    assert [(debate.id, debate.title, debate.type) for debate in debates] == [
        ("n1", "First item", "Business"),
        ("n2", "Second item", "Business"),
    ]


def test_oral_heading_closes_debate_and_resets_type():
    root = sitting(
        heading("major-heading", "Topic", id="m1"),
        speech("S1"),
        heading("oral-heading", "Oral Answers", id="o1"),
        speech("S2", type="Start Question"),
        heading("major-heading", "Defence", id="m2"),
        speech("S3"),
    )

    debates = segment_debates(root)

    assert [debate.id for debate in debates] == ["m1", "o1"]
    assert debates[1].title == "Start Question"
    # the major heading after the oral heading continues the open debate
    assert contents(debates[1]) == ["S2", "S3"]


def test_speaker_ids_are_deduplicated_in_first_seen_order():
    root = sitting(
        heading("major-heading", "Topic", id="m1"),
        speech("one", person_id="uk.org.publicwhip/person/A", speakername="Alice"),
        speech("two", person_id="uk.org.publicwhip/person/B", speakername="Bob"),
        speech("three", person_id="uk.org.publicwhip/person/A", speakername="Alice"),
        speech("four", person_id="uk.org.publicwhip/person/C", speakername="Carol"),
        speech("five"),
    )

    (debate,) = segment_debates(root)

    assert debate.speaker_ids == ("A", "B", "C")
    assert debate.speaker_names == ("Alice", "Bob", "Carol")
    assert debate.speeches[-1].speaker_id is None
    assert debate.speeches[-1].speaker_name == "No Name"


def test_speech_fields_fall_back_when_attributes_are_missing():
    root = sitting(speech("first line", "second line", time="14:05:59"), speech())

    (debate,) = segment_debates(root)

    first, second = debate.speeches
    assert first.content == "first line\nsecond line"
    assert first.time == "14:05"
    assert second.content == ""
    assert second.time == "00:00"


def test_speech_opened_debate_uses_speech_type_before_placeholder():
    root = sitting(speech("S1", id="uk.org.publicwhip/debate/s1", type="Statement"))

    (debate,) = segment_debates(root)

    assert debate.id == "s1"
    assert debate.title == "Statement"
    assert debate.type == "Statement"


def test_unknown_nodes_are_walked_transparently():
    root = sitting(
        TreeNode("section", {}, "", (heading("major-heading", "Nested", id="m1"), speech("S1"))),
        TreeNode("division", {"id": "d1"}, "", (TreeNode("mplist", {}, "Ayes"),)),
        speech("S2"),
    )

    (debate,) = segment_debates(root)

    assert debate.type == "Nested"
    assert contents(debate) == ["S1", "S2"]


def test_every_speech_lands_in_exactly_one_debate():
    root = sitting(
        speech("a"),
        heading("oral-heading", "Oral", id="o1"),
        heading("major-heading", "M1", id="m1"),
        speech("b"),
        heading("minor-heading", "n1", id="n1"),
        speech("c"),
        speech("d"),
        heading("major-heading", "M2", id="m2"),
        heading("major-heading", "M3", id="m3"),
        speech("e"),
        heading("minor-heading", "n2"),
        heading("minor-heading", "n3"),
        speech("f"),
    )

    debates = segment_debates(root)

    flattened = [content for debate in debates for content in contents(debate)]
    assert flattened == ["a", "b", "c", "d", "e", "f"]
    identifiers = [debate.id for debate in debates]
    assert len(identifiers) == len(set(identifiers))


def test_empty_debates_are_still_emitted():
    root = sitting(heading("minor-heading", "Empty", id="n1"), heading("minor-heading", "Full", id="n2"), speech("S"))

    debates = segment_debates(root)

    assert [debate.id for debate in debates] == ["n1", "n2"]
    assert debates[0].speeches == ()


def test_empty_and_missing_trees_yield_no_debates():
    assert segment_debates(sitting()) == []
    assert segment_debates(None) == []
    assert segment_debates(sitting(heading("major-heading", "Only headings", id="m1"))) == []


def test_segmenter_is_reentrant():
    root = sitting(speech("S1"), heading("minor-heading", "M"), speech("S2"))
    segmenter = DebateSegmenter()

    first = segmenter.segment(root)
    second = segmenter.segment(root)

    assert first == second
    assert [debate.id for debate in second] == ["speech_1", "minor_2"]


def test_scope_applies_to_synthesised_ids_only():
    root = sitting(
        speech("S1"),
        heading("minor-heading", "M"),
        speech("S2"),
        heading("minor-heading", "N", id="uk.org.publicwhip/debate/2024-05-01a.9.0"),
        speech("S3"),
    )

    first = segment_debates(root, chamber_profile("commons"), scope="2024-05-01a.")
    second = segment_debates(root, chamber_profile("commons"), scope="2024-05-02a.")

    assert [debate.id for debate in first] == [
        "commons2024-05-01a.speech_1",
        "commons2024-05-01a.minor_2",
        "commons2024-05-01a.9.0",
    ]
    assert {debate.id for debate in first[:2]}.isdisjoint(debate.id for debate in second)


def test_commons_profile_prefixes_ids_and_detects_urgent_questions():
    root = sitting(
        speech("(Urgent Question): To ask the Secretary of State...", id="uq1", speakername="Several hon. Members"),
    )

    (debate,) = segment_debates(root, chamber_profile("commons"))

    assert debate.id == "commonsuq1"
    assert debate.type == "Urgent Question"
    assert debate.title == "No Title"
    assert debate.speeches[0].speaker_name == "No Name"
    assert debate.speaker_names == ()


def test_westminster_profile_splits_bracketed_minor_titles():
    root = sitting(
        heading("minor-heading", "Rural Bus Services — [Sir Roger Gale in the Chair]", id="w1"),
        speech("S1"),
        speech("S2", id="s2"),
    )

    (debate,) = segment_debates(root, chamber_profile("westminster"))

    assert debate.id == "westminsterw1"
    assert debate.title == "Rural Bus Services"
    assert debate.type == "Sir Roger Gale in the Chair"


def test_westminster_placeholder_type():
    (debate,) = segment_debates(sitting(speech("S1", id="s1")), chamber_profile("westminster"))

    assert debate.title == "No Title"
    assert debate.type == "Unknown"


def test_fallback_debate_uses_first_speech_identity():
    segmenter = DebateSegmenter(chamber_profile("commons"))

    record = segmenter.fallback_debate(FirstSpeech("2024-05-01a.1.2", "Start Question"), SyntheticIds())
    anonymous = segmenter.fallback_debate(FirstSpeech(None, ""), SyntheticIds())

    assert record.id == "commons2024-05-01a.1.2"
    assert record.title == "Start Question"
    assert record.type == "Start Question"
    assert record.speeches == ()
    assert anonymous.id == "commonsspeech_1"
    assert anonymous.title == "No Title"
    assert anonymous.type == "No Subtitle"


def test_parse_debates_from_xml(commons_xml):
    debates = parse_debates(commons_xml, chamber_profile("commons"))

    assert [debate.id for debate in debates] == ["commons2024-05-01a.1.1", "commons2024-05-01a.1.3"]
    intro, inflation = debates
    assert intro.type == "Treasury"
    assert intro.speeches[0].time == "11:30"
    assert intro.speeches[0].content == "The Chancellor of the Exchequer was asked—"
    assert inflation.title == "Inflation"
    assert inflation.type == "Treasury"
    assert inflation.speaker_ids == ("10002", "10003", "10004")
    assert inflation.speeches[0].content == "What assessment [Interruption.] has he made of inflation?"
    assert inflation.speeches[2].content == "Thank you.\nInflation has fallen."
    assert inflation.speeches[3].speaker_name == "No Name"


def test_default_profile_segments_xml_tree(commons_xml):
    debates = segment_debates(build_tree(commons_xml))

    assert [debate.id for debate in debates] == ["2024-05-01a.1.1", "2024-05-01a.1.3"]
    assert [len(debate.speeches) for debate in debates] == [1, 4]
