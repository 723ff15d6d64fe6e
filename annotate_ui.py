from __future__ import annotations

import argparse
from dataclasses import dataclass

from annotator import (
    AnnotationSession,
    AnnotatorError,
    BehaviorRegistry,
    DocumentProvider,
    InvalidArgumentError,
    SpanStore,
    configure_logging,
    export_annotations,
    load_default_traces,
    load_settings_from_env,
    load_traces,
    render_segments,
    render_span_detail,
    render_span_list,
)

HELP_TEXT = """Commands:
  show               Display the current trace with highlights
  next | prev        Move to the next or previous trace
  goto N             Jump to trace number N
  select TEXT        Select text from the trace for annotation
  behaviors          List the available behaviors
  behavior X         Choose a behavior by name or number
  score N            Choose a score (1 or 2)
  submit             Annotate the selected text
  list               List annotations on the current trace
  activate ID        Toggle emphasis for an annotation
  click OFFSET       Activate the annotation covering a character offset
  delete ID          Delete an annotation
  export [PATH]      Write all annotations to a JSON file
  quit | exit        Leave the annotator"""


@dataclass(frozen=True)
class CommandResult:
    output: str
    quit: bool = False


def render_view(session: AnnotationSession, *, color: bool = False) -> str:
    document = session.current_document()
    lines = [session.provider.position_label(), f"ID: {document.doc_id}"]
    if document.question:
        lines.append(document.question)
    lines.append("")
    lines.append(render_segments(session.segments(), color=color))

    hovered = session.hovered_span()
    if hovered is not None:
        lines.extend(["", render_span_detail(hovered)])

    lines.append("")
    if session.view.pending_selection:
        lines.append(f'Selected text: "{session.view.pending_selection}"')
    lines.append(f"Behavior: {session.view.behavior} | Score: {session.view.score}")
    return "\n".join(lines)


def execute_command(
    session: AnnotationSession,
    command_line: str,
    *,
    export_path: str,
    color: bool = False,
) -> CommandResult:
    command, _, argument = command_line.strip().partition(" ")
    command = command.lower()
    argument = argument.strip()

    if command in {"exit", "quit"}:
        return CommandResult("Goodbye.", quit=True)
    if command in {"", "show"}:
        return CommandResult(render_view(session, color=color))
    if command == "help":
        return CommandResult(HELP_TEXT)

    try:
        if command == "next":
            if not session.next_document():
                return CommandResult("Already at the last trace.")
            return CommandResult(render_view(session, color=color))
        if command == "prev":
            if not session.previous_document():
                return CommandResult("Already at the first trace.")
            return CommandResult(render_view(session, color=color))
        if command == "goto":
            session.go_to(_parse_int(argument, "trace number") - 1)
            return CommandResult(render_view(session, color=color))
        if command == "select":
            selected = session.capture_selection(argument)
            return CommandResult(f'Selected text: "{selected}"' if selected else "Selection cleared.")
        if command == "behaviors":
            return CommandResult(
                "\n".join(f"{position}. {label}" for position, label in enumerate(session.registry.labels(), start=1))
            )
        if command == "behavior":
            return CommandResult(f"Behavior: {session.choose_behavior(argument)}")
        if command == "score":
            return CommandResult(f"Score: {session.choose_score(argument)}")
        if command == "submit":
            span = session.submit()
            return CommandResult(f'Added annotation #{span.span_id}: "{span.text}"')
        if command == "list":
            return CommandResult(render_span_list(session.spans(), session.active_span_id()))
        if command == "activate":
            session.toggle_active(_parse_int(argument, "annotation id"))
            return CommandResult(render_view(session, color=color))
        if command == "click":
            if session.activate_at(_parse_int(argument, "offset")) is None:
                return CommandResult("No annotation at that position.")
            return CommandResult(render_view(session, color=color))
        if command == "delete":
            session.delete(_parse_int(argument, "annotation id"))
            return CommandResult(render_view(session, color=color))
        if command == "export":
            path = export_annotations(session.store, argument or export_path)
            return CommandResult(f"Annotations saved to {path}")
    except AnnotatorError as exc:
        return CommandResult(f"Error: {exc}")

    return CommandResult(f"Unknown command '{command}'. Type 'help' for a list of commands.")


def _parse_int(value: str, name: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise InvalidArgumentError(f"Expected a number for the {name}, got '{value}'") from exc


def build_session(traces_path: str | None, behaviors_path: str | None) -> AnnotationSession:
    documents = load_traces(traces_path) if traces_path else load_default_traces()
    registry = BehaviorRegistry.from_json(behaviors_path) if behaviors_path else None
    return AnnotationSession(DocumentProvider(documents), SpanStore(), registry)


def run_annotator(session: AnnotationSession, *, export_path: str, color: bool) -> None:
    print("LLM Reasoning Trace Annotator. Type 'help' for commands, 'exit' or 'quit' to leave.\n")
    print(render_view(session, color=color))

    while True:
        try:
            user_input = input("\nannotate> ")
        except (EOFError, KeyboardInterrupt):
            print("\nExiting annotator.")
            break

        result = execute_command(session, user_input, export_path=export_path, color=color)
        print(result.output)
        if result.quit:
            break


def main() -> None:
    settings = load_settings_from_env()
    parser = argparse.ArgumentParser(description="Annotate LLM reasoning traces with cognitive behaviors.")
    parser.add_argument(
        "--traces",
        default=settings.traces_path,
        help="JSON/JSONL file or URL with traces (default: bundled sample traces).",
    )
    parser.add_argument(
        "--behaviors",
        default=settings.behaviors_path,
        help="JSON file listing behavior labels (default: bundled behaviors).",
    )
    parser.add_argument(
        "--export",
        default=settings.export_path,
        help="Where the export command writes annotations (default: %(default)s).",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Mark highlights with brackets instead of terminal colors.",
    )
    args = parser.parse_args()

    configure_logging(settings)
    session = build_session(args.traces, args.behaviors)
    run_annotator(session, export_path=args.export, color=not args.no_color)


if __name__ == "__main__":
    main()
