from usfm_converter.prompts import PROMPT_VERSION, build_messages, load_system_prompt


def test_build_messages_order_and_verbatim_user_text():
    raw = "  John 3:16 - NOTE: love \\ weird  \n"
    msgs = build_messages(raw)
    assert [m.role for m in msgs] == ["system", "user"]
    assert msgs[1].content == raw
    assert msgs[0].content == load_system_prompt()


def test_build_messages_is_deterministic():
    assert build_messages("abc") == build_messages("abc")


def test_system_prompt_describes_markers_and_output_contract():
    prompt = load_system_prompt()
    for marker in ("\\id", "\\h", "\\mt", "\\v", "\\p", "\\f*", "\\x*", "\\esbe"):
        assert marker in prompt
    assert "USFM markup only" in prompt
    assert PROMPT_VERSION


def test_system_prompt_keeps_guideline_wording():
    prompt = load_system_prompt()
    assert "  - Store the current verse reference for footnotes" in prompt
    assert "  - Clear verse reference when crossing paragraph boundaries" in prompt
    assert "  - Ensure all marker pairs (\\f..\\f*, \\x..\\x*, etc.) are properly closed" in prompt
    assert "6. Validate marker pairs\n\nRespond with USFM markup only." in prompt
