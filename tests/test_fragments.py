from arkconfig.fragments import FragmentComposer, compose
from arkconfig.session import ConfigSession


def test_compose_is_plain_concatenation():
    assert compose("[A]\nX=1\n", "[B]\nY=2") == "[A]\nX=1\n\n\n[B]\nY=2"
    assert compose("", "x") == "\n\nx"


def test_append_is_pending_raw_text():
    session = ConfigSession(raw_text="[A]\nX=1\n")
    composer = FragmentComposer(session)
    text = composer.append("[A]\nX=2\nZ=3")
    assert text == "[A]\nX=1\n\n\n[A]\nX=2\nZ=3"
    assert session.raw_text == text
    assert session.get_setting("A", "X") == "1"
    assert session.get_original("A", "X") == "1"
    assert session.has_pending_fragments
    assert session.has_changes()
    assert composer.history == ["[A]\nX=2\nZ=3"]


def test_append_keeps_structured_edits():
    session = ConfigSession(raw_text="[A]\nX=1\n")
    session.update_setting("A", "X", "EDITED")
    FragmentComposer(session).append("[B]\nY=2")
    assert session.get_setting("A", "X") == "EDITED"
    assert session.render_raw() == "[A]\nX=EDITED\n\n\n[B]\nY=2"


def test_render_raw_keeps_repeated_fragment_keys():
    session = ConfigSession(raw_text="[A]\nX=1\n")
    session.update_setting("A", "X", "5")
    FragmentComposer(session).append("[R]\nRamp=a\nRamp=b\nRamp=c")
    rendered = session.render_raw()
    assert rendered.count("Ramp=") == 3
    assert "X=5" in rendered
