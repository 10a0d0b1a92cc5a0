"""Tests for the document-change handler."""

from agentstamp.attribution import AttributionResult, Confidence, StackFrame
from agentstamp.checkpoint import AiAgentInput, HumanInput
from agentstamp.constants import GENERIC_AGENT_NAME
from agentstamp.handler import ChangeAttributionHandler, build_checkpoint_input


class _RecordingDispatcher:
    def __init__(self, result: bool = True):
        self.result = result
        self.calls = []

    def checkpoint(self, checkpoint_input, working_directory):
        self.calls.append((checkpoint_input, working_directory))
        return self.result


def _frame(type_name: str) -> StackFrame:
    return StackFrame(type_name=type_name, method_name="run", file_name="X.kt", line_number=1)


def test_build_checkpoint_input_for_agent():
    result = AttributionResult(agent_name="Tabnine", confidence=Confidence.HIGH)
    assert build_checkpoint_input(result) == AiAgentInput(agent_name="Tabnine")


def test_build_checkpoint_input_for_human():
    assert build_checkpoint_input(AttributionResult()) == HumanInput()


def test_generic_detection_is_attributed_to_agent():
    handler = ChangeAttributionHandler(_RecordingDispatcher())
    assert handler.classify([_frame("org.example.InlayHintsPass")]) == AiAgentInput(agent_name=GENERIC_AGENT_NAME)


def test_on_document_change_dispatches_agent_checkpoint():
    dispatcher = _RecordingDispatcher()
    handler = ChangeAttributionHandler(dispatcher)

    ok = handler.on_document_change([_frame("java.lang.Thread"), _frame("com.codeium.Editor")], "/repo")

    assert ok is True
    assert dispatcher.calls == [(AiAgentInput(agent_name="Codeium"), "/repo")]


def test_on_document_change_dispatches_human_checkpoint():
    dispatcher = _RecordingDispatcher(result=False)
    handler = ChangeAttributionHandler(dispatcher)

    assert handler.on_document_change([_frame("java.lang.Thread")], "/repo") is False
    assert dispatcher.calls == [(HumanInput(), "/repo")]


def test_handler_uses_injected_analyzer():
    seen = []

    def _analyzer(stack, signatures):
        seen.append(list(stack))
        return AttributionResult(agent_name="Custom", confidence=Confidence.LOW)

    dispatcher = _RecordingDispatcher()
    handler = ChangeAttributionHandler(dispatcher, analyzer=_analyzer)
    handler.on_document_change([], "/repo")

    assert seen == [[]]
    assert dispatcher.calls == [(AiAgentInput(agent_name="Custom"), "/repo")]
