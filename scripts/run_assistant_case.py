# scripts/run_assistant_case.py

import argparse
import logging
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv

env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(env_path)

from agentic_assistant.config import AssistantSettings
from agentic_assistant.executor.progress import CollectingProgressSink
from agentic_assistant.session import AssistantSession
from scripts.case_utils import get_case_id, resolve_cases, write_artifact

logger = logging.getLogger(__name__)


def run_single_case(
    case_path: Path,
    case: Dict[str, Any],
    *,
    run_id: str,
    settings: AssistantSettings,
) -> None:
    """Ingest a case's documents, ask its requests in order, persist replies and progress."""
    case_id = get_case_id(case_path, case)

    progress = CollectingProgressSink()
    session = AssistantSession.from_settings(settings, progress=progress)

    documents = case.get("documents") or {}
    if documents:
        counts = session.add_documents(documents)
        print(f"  Indexed {sum(counts.values())} chunks from {len(counts)} documents")

    print(f"\nRunning assistant for case: {case_id}")
    replies = []
    for request in case.get("requests") or []:
        reply = session.ask(request)
        replies.append({"request": request, "reply": reply.to_dict()})
        status = "✓" if reply.ok else "⚠"
        print(f"  {status} {request[:60]!r}: {len(reply.step_results)}/{len(reply.plan)} steps ({reply.plan_source})")
        if reply.errors:
            print(f"  ⚠ Produced errors: {list(reply.errors)}")

    artifacts_dir = Path("artifacts/assistant_eval")
    write_artifact(artifacts_dir, run_id, case_id, "input", case)
    write_artifact(artifacts_dir, run_id, case_id, "replies", replies)
    write_artifact(artifacts_dir, run_id, case_id, "progress", progress.events)
    write_artifact(artifacts_dir, run_id, case_id, "history", list(session.history))

    print(f"Artifacts written to: {artifacts_dir / run_id / case_id}")


def main():
    parser = argparse.ArgumentParser(
        description="Run the assistant on case(s) and persist outputs.\n\n"
        "A case is a JSON object with optional 'documents' ({source_id: text}) and 'requests' (list of str).\n"
        "Supports both single cases and glob patterns:\n"
        "  --case tests/assistant_eval/cases/c001_*.json\n"
        "  --case 'tests/**/cases/**/*.json'",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--case",
        required=True,
        help="Path to case JSON or glob pattern",
    )
    parser.add_argument(
        "--run-id",
        default="manual",
        help="Run id for artifacts (default: manual)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    args = parser.parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    # Resolve cases (supports both single file and glob patterns)
    cases = resolve_cases(args.case)
    print(f"Found {len(cases)} case(s) to process")

    settings = AssistantSettings.from_env()

    # Process each case
    for i, (case_path, case_data) in enumerate(cases, 1):
        if len(cases) > 1:
            print(f"\n{'='*60}")
            print(f"Processing case {i}/{len(cases)}: {case_path.name}")
            print(f"{'='*60}")

        try:
            run_single_case(case_path, case_data, run_id=args.run_id, settings=settings)
        except Exception as e:
            print(f"\n❌ Error processing {case_path.name}: {e}")
            if len(cases) == 1:
                raise
            # Continue with other cases
            continue

    print(f"\n{'='*60}")
    print(f"✓ Completed {len(cases)} case(s)")
    print(f"{'='*60}")


if __name__ == "__main__":
    main()
