from __future__ import annotations

from bulkverify.core.validation.orchestrator import BatchReport


def build_summary_payload(report: BatchReport) -> dict:
    title = "Steam Bulk Verify"
    if report.aborted:
        status_text = "Batch aborted: Steam is no longer running"
    elif report.stopped:
        status_text = "Batch stopped"
    else:
        status_text = "Batch finished"

    body_lines = [
        status_text,
        "",
        f"• Verified: {report.count('COMPLETED')}",
        f"• Timed out: {report.count('TIMED_OUT')}",
        f"• Skipped: {report.count('SKIPPED_VALIDATED') + report.count('SKIPPED_BLACKLISTED')}",
    ]
    if report.aborted and report.results:
        body_lines.append(f"• Interrupted during: {report.results[-1].title.label()}")
    return {"title": title, "body": "\n".join(body_lines)}
