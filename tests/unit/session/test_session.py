# tests/unit/session/test_session.py
"""Unit tests for AssistantSession end to end with fake collaborators."""

import pytest

from agentic_assistant.adapters import ImagePayload
from agentic_assistant.errors import GenerationError
from agentic_assistant.executor.state import StepResult


class TestAsk:
    """Tests for ask()."""

    def test_blank_request_rejected(self, make_session, scripted_llm):
        session = make_session(scripted_llm(plan=[]))

        with pytest.raises(ValueError):
            session.ask("   ")
        assert session.history == ()

    def test_knowledge_then_summary(self, make_session, scripted_llm):
        llm = scripted_llm(
            plan=[
                {"agent": "KnowledgeAgent", "prompt": "What color is the sky?"},
                {"agent": "SummarizationAgent", "prompt": "{{step_1_output}}"},
            ],
            answers=["The sky is blue.", "Blue sky."],
        )
        session = make_session(llm)
        session.add_document("sky.txt", "The sky is blue. Grass is green.")

        reply = session.ask("What color is the sky? Keep it short.")

        assert reply.ok
        assert reply.plan_source == "fenced"
        assert [r.capability for r in reply.step_results] == ["KnowledgeAgent", "SummarizationAgent"]
        assert reply.step_results[0].sources[0].source_id == "sky.txt"
        assert "sky is blue" in reply.step_results[0].sources[0].text
        assert reply.final_result.text == "Blue sky."
        assert reply.step_status == ("completed", "completed")
        # summary step saw step 1's output
        assert "--- TEXT ---\nThe sky is blue.\n--- END TEXT ---" in llm.prompts[-1]

    def test_transcript_records_turns(self, make_session, scripted_llm):
        session = make_session(scripted_llm(plan=[{"agent": "WebSearchAgent", "prompt": "news"}], answers=["headlines"]))

        session.ask("What's new?")

        turns = session.history
        assert [(t.role, t.text, t.capability) for t in turns] == [
            ("user", "What's new?", None),
            ("assistant", "headlines", "WebSearchAgent"),
        ]

    def test_planner_sees_recent_history(self, make_session, scripted_llm):
        llm = scripted_llm(plan=[{"agent": "WebSearchAgent", "prompt": "q"}])
        session = make_session(llm)

        session.ask("first question")
        session.ask("second question")

        planner_prompt = [p for p in llm.prompts if "expert planning agent" in p][-1]
        assert "user: first question" in planner_prompt
        assert f"assistant: {session.history[1].text}" in planner_prompt
        # the current request is passed once, not echoed back as history
        assert "user: second question" not in planner_prompt

    def test_first_request_plans_with_empty_history(self, make_session, scripted_llm):
        llm = scripted_llm(plan=[{"agent": "WebSearchAgent", "prompt": "q"}])

        make_session(llm).ask("only question")

        planner_prompt = [p for p in llm.prompts if "expert planning agent" in p][0]
        assert "user: only question" not in planner_prompt

    def test_unparseable_plan_falls_back_to_web_search(self, make_session, scripted_llm):
        llm = scripted_llm(plan="not json at all", answers=["web answer"])
        session = make_session(llm)

        reply = session.ask("latest news")

        assert reply.plan_source == "fallback"
        assert reply.plan.to_wire() == [{"agent": "WebSearchAgent", "prompt": "latest news"}]
        assert reply.final_result.text == "web answer"

    def test_planner_failure_still_runs_fallback(self, make_session, scripted_llm):
        llm = scripted_llm(plan=GenerationError("API Error: 500"), answers=["web answer"])

        reply = make_session(llm).ask("latest news")

        assert reply.plan_source == "fallback"
        assert reply.ok

    def test_unknown_capability_then_next_step(self, make_session, scripted_llm):
        llm = scripted_llm(
            plan=[{"agent": "FooAgent", "prompt": "x"}, {"agent": "WebSearchAgent", "prompt": "y"}],
            answers=["done"],
        )

        reply = make_session(llm).ask("do it")

        assert reply.step_status == ("failed", "completed")
        assert '"FooAgent"' in reply.step_results[0].text
        assert reply.final_result.text == "done"
        assert reply.ok

    def test_collaborator_failure_aborts_with_one_error(self, make_session, scripted_llm):
        llm = scripted_llm(
            plan=[
                {"agent": "WebSearchAgent", "prompt": "a"},
                {"agent": "CodeGenerationAgent", "prompt": "b"},
                {"agent": "WebSearchAgent", "prompt": "c"},
            ],
            answers=["ok", GenerationError("API Error: 503")],
        )
        session = make_session(llm)

        reply = session.ask("multi step")

        assert not reply.ok
        assert len(reply.errors) == 1
        assert "503" in reply.errors[0]["message"]
        assert [r.text for r in reply.step_results] == ["ok"]
        assert reply.step_status == ("completed", "failed", "pending")
        # partial transcript is kept
        assert [t.text for t in session.history] == ["multi step", "ok"]

    def test_progress_events_reported(self, make_session, scripted_llm, progress):
        session = make_session(scripted_llm(plan=[{"agent": "WebSearchAgent", "prompt": "q"}]))

        session.ask("hello")

        assert [type(e).__name__ for e in progress.events] == ["StepProgress", "StepCompleted"]
        assert progress.events[-1].is_final

    def test_to_dict(self, make_session, scripted_llm):
        session = make_session(scripted_llm(plan=[{"agent": "WebSearchAgent", "prompt": "q"}], answers=["a"]))

        data = session.ask("hello").to_dict()

        assert data["plan"] == [{"agent": "WebSearchAgent", "prompt": "q"}]
        assert data["final_result"] == {"capability": "WebSearchAgent", "text": "a", "sources": None, "failed": False}
        assert data["errors"] == []


class TestCancel:
    """Tests for cancel()."""

    def test_cancel_mid_run(self, make_session, scripted_llm):
        llm = scripted_llm(
            plan=[{"agent": "WebSearchAgent", "prompt": "1"}, {"agent": "WebSearchAgent", "prompt": "2"}]
        )
        session = make_session(llm)

        original = session.dispatcher.dispatch

        def dispatch_then_cancel(capability, prompt):
            result = original(capability, prompt)
            session.cancel()
            return result

        session.dispatcher.dispatch = dispatch_then_cancel

        reply = session.ask("two steps")

        assert reply.cancelled is True
        assert len(reply.step_results) == 1
        assert reply.step_status == ("completed", "pending")

    def test_next_ask_is_not_cancelled(self, make_session, scripted_llm):
        session = make_session(scripted_llm(plan=[{"agent": "WebSearchAgent", "prompt": "1"}]))
        session.cancel()

        reply = session.ask("fresh run")

        assert reply.cancelled is False
        assert len(reply.step_results) == 1


class TestDocumentsAndImages:
    """Tests for document and image management."""

    def test_add_and_remove_documents(self, make_session, scripted_llm):
        session = make_session(scripted_llm())

        counts = session.add_documents({"a.txt": "blue sky", "b.txt": "green grass everywhere"})

        assert counts == {"a.txt": 1, "b.txt": 2}
        assert session.documents == ["a.txt", "b.txt"]
        assert session.remove_document("a.txt") == 1
        assert session.documents == ["b.txt"]
        assert session.remove_document("a.txt") == 0

    def test_removed_document_is_not_retrieved(self, make_session, scripted_llm):
        llm = scripted_llm(plan=[{"agent": "KnowledgeAgent", "prompt": "sky"}])
        session = make_session(llm)
        session.add_document("sky.txt", "The sky is blue.")
        session.remove_document("sky.txt")

        reply = session.ask("sky?")

        assert "couldn't find any relevant information" in reply.final_result.text
        assert reply.final_result.sources is None

    def test_image_analysis_uses_attached_image_once(self, make_session, scripted_llm):
        image = ImagePayload(mime_type="image/jpeg", base64_data="/9j/4AAQ", name="cat.jpg")
        llm = scripted_llm(plan=[{"agent": "ImageAnalysisAgent", "prompt": "What is this?"}], answers=["A cat."])
        session = make_session(llm)
        session.attach_image(image)

        first = session.ask("What is this?")
        second = session.ask("And now?")

        assert first.final_result.text == "A cat."
        assert llm.images[1] is image
        assert second.final_result == StepResult(
            capability="ImageAnalysisAgent", text="Error: No image was attached.", failed=True
        )

    def test_removing_image_by_name(self, make_session, scripted_llm):
        session = make_session(scripted_llm())
        session.attach_image(ImagePayload(mime_type="image/png", base64_data="x", name="pic.png"))

        session.remove_document("pic.png")

        assert session.images.peek() is None
