from arkconfig.ini import copy_document, get_value, parse, serialize, update_text


def test_parse_and_serialize_example():
    doc = parse("[A]\nX=1\n\n[B]\nY=2\n")
    assert doc == {"A": {"X": "1"}, "B": {"Y": "2"}}
    assert serialize(doc) == "[A]\nX=1\n\n[B]\nY=2\n\n"


def test_round_trip(sample_text):
    doc = parse(sample_text)
    assert parse(serialize(doc)) == doc


def test_lenient_lines_are_skipped():
    text = "Orphan=1\n; comment\n[S]\nnot a pair\nKey = a=b \n"
    assert parse(text) == {"S": {"Key": "a=b"}}


def test_crlf_and_whitespace():
    assert parse("  [S]  \r\nA=1\r\n") == {"S": {"A": "1"}}


def test_repeated_header_reopens_section():
    doc = parse("[S]\nA=1\nB=1\n[T]\nC=3\n[S]\nA=2\n")
    assert doc == {"S": {"A": "2", "B": "1"}, "T": {"C": "3"}}
    assert list(doc) == ["S", "T"]


def test_empty_header_behaves_like_no_header():
    assert parse("[S]\nA=1\n[]\nB=2\n") == {"S": {"A": "1"}}


def test_empty_input():
    assert parse("") == {}
    assert serialize({}) == ""


def test_copy_is_independent():
    doc = parse("[S]\nA=1\n")
    copy = copy_document(doc)
    copy["S"]["A"] = "2"
    assert get_value(doc, "S", "A") == "1"
    assert get_value(doc, "Missing", "A", "x") == "x"


def test_update_text_unchanged_document_keeps_text():
    text = "; header comment\n[A]\nX=1\n\n"
    assert update_text(text, parse(text)) == text


def test_update_text_rewrites_last_occurrence_only():
    text = "[R]\nRamp=a\nRamp=b\n; keep me\nMax=1\n"
    doc = parse(text)
    doc["R"]["Ramp"] = "z"
    doc["R"]["Max"] = "2"
    assert update_text(text, doc) == "[R]\nRamp=a\nRamp=z\n; keep me\nMax=2\n"


def test_update_text_adds_and_removes():
    text = "[A]\nX=1\nY=2\n\n[B]\nZ=3\n"
    doc = parse(text)
    del doc["A"]["Y"]
    doc["A"]["New"] = "4"
    del doc["B"]
    doc["C"] = {"K": "v"}
    result = update_text(text, doc)
    assert result == "[A]\nX=1\nNew=4\n\n[C]\nK=v\n\n"
    assert parse(result) == doc
