from gitlore import prompts

def test_each_builder_returns_one_user_message():
    conversations = [
        prompts.build_impact_messages("print(1)"),
        prompts.build_narrate_messages("print(1)", "main.py"),
        prompts.build_risk_messages("def f(): pass"),
        prompts.build_search_messages("what?", "ctx"),
        prompts.build_file_summary_messages("print(1)", "main.py"),
    ]
    for messages in conversations:
        assert len(messages) == 1
        assert messages[0].role == "user"

def test_message_ids():
    assert prompts.build_impact_messages("a")[0].id == "impact-prompt"
    assert prompts.build_narrate_messages("a", None)[0].id == "narrate-prompt"
    assert prompts.build_risk_messages("a")[0].id == "risk-prompt"
    assert prompts.build_search_messages("a", None)[0].id == "search-prompt"
    assert prompts.build_file_summary_messages("a", "p")[0].id == "file-summary"

def test_input_with_braces_is_embedded_verbatim():
    code = "function f(){ return {a: 1}; }"
    content = prompts.build_risk_messages(code)[0].content
    assert code in content
    assert '{ "score": number, "reason": "string" }' in content

def test_narrate_defaults_path_to_unknown():
    content = prompts.build_narrate_messages("body", None)[0].content
    assert "File: unknown" in content

def test_risk_code_truncated_to_5000():
    content = prompts.build_risk_messages("a" * 6000)[0].content
    assert "a" * 5000 in content
    assert "a" * 5001 not in content

def test_search_context_truncated_and_defaulted():
    content = prompts.build_search_messages("q", "c" * 7000)[0].content
    assert "c" * 5000 in content
    assert "c" * 5001 not in content

    content = prompts.build_search_messages("where is auth?", None)[0].content
    assert "No context provided." in content
    assert "Question: where is auth?" in content

def test_file_summary_content_truncated_to_8000():
    content = prompts.build_file_summary_messages("f" * 9000, "big.txt")[0].content
    assert "File path: big.txt" in content
    assert "f" * 8000 in content
    assert "f" * 8001 not in content

def test_echo_file_content():
    assert prompts.echo_file_content("short") == "short"

    echoed = prompts.echo_file_content("e" * 20000)
    assert echoed == "e" * 16000 + "\n// … truncated"
