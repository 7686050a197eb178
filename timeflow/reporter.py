"""
Report Generation Module.

This module handles formatting and saving productivity reports,
as well as console output for progress indication.
"""

from __future__ import annotations

import os
from datetime import datetime
from typing import Any

INSIGHT_ICONS = {"positive": "✅", "warning": "⚠️", "neutral": "💡"}


def render_bar(productive: int, other: int) -> str:
    """
    Render an hour's split as a text bar, one block per 15 minutes.

    Args:
        productive: Productive minutes in the hour.
        other: Other minutes in the hour.

    Returns:
        A string such as "███░" (filled blocks productive, light blocks other).
    """
    return "█" * (productive // 15) + "░" * (other // 15)


class ReportGenerator:
    """
    Generator for creating and saving Markdown productivity reports.

    Attributes:
        output_dir: Directory path where reports will be saved.

    Example:
        >>> generator = ReportGenerator("./reports")
        >>> filepath = generator.save(metrics, "2024-03-04", "2024-03-10", "week")
    """

    def __init__(self, output_dir: str = "./reports") -> None:
        """
        Initialize the report generator.

        Args:
            output_dir: Directory path for saving reports. Defaults to "./reports".
        """
        self.output_dir = output_dir

    def generate_markdown(
        self,
        metrics: dict[str, Any],
        start: str,
        end: str,
        period_name: str,
    ) -> str:
        """
        Generate complete Markdown report content.

        Args:
            metrics: A daily or period metrics bundle.
            start: First date of the report (YYYY-MM-DD).
            end: Last date of the report (YYYY-MM-DD).
            period_name: Period name ("day", "week", "month" or "custom").

        Returns:
            The complete Markdown report as a string.
        """
        span = start if start == end else f"{start} ~ {end}"
        sections = [
            f"""# TimeFlow Report
> {period_name} | {span}
> Generated: {datetime.now().strftime('%Y-%m-%d %H:%M')}

---

## 📊 Overview

- Time logged: {metrics['total_hours']}h ({metrics['total_slots']} slots)
- Productivity score: {metrics['productivity_score']}%
- Longest focus streak: {metrics['max_streak']} min
- Peak hour: {metrics['peak_hour_label']}""",
        ]

        if "daily_summaries" in metrics:
            sections[0] += (
                f"\n- Days logged: {metrics['days_with_data']} of {metrics['total_days']}"
                f"\n- Average per logged day: {metrics['avg_minutes_per_day']} min, "
                f"{metrics['avg_productivity_score']}% productive"
            )

        sections.append(self._format_categories(metrics["category_breakdown"]))

        if "daily_summaries" in metrics:
            sections.append(self._format_days(metrics["daily_summaries"]))
        else:
            sections.append(self._format_hours(metrics["hourly_data"]))

        sections.append(self._format_insights(metrics["insights"]))

        return "\n\n".join(sections) + "\n"

    @staticmethod
    def _format_categories(breakdown: list[dict[str, Any]]) -> str:
        if not breakdown:
            return "## 🗂️ Categories\n\n(no entries logged)"

        lines = [
            "## 🗂️ Categories",
            "",
            "| Category | Hours | Share |",
            "|---|---|---|",
        ]
        for c in breakdown:
            lines.append(f"| {c['emoji']} {c['label']} | {c['hours']}h | {c['percentage']}% |")
        return "\n".join(lines)

    @staticmethod
    def _format_hours(hourly_data: list[dict[str, Any]]) -> str:
        lines = ["## ⏰ By Hour", "", "```"]
        for bucket in hourly_data:
            bar = render_bar(bucket["productive"], bucket["other"])
            lines.append(f"{bucket['label']:>4} {bar}")
        lines.append("```")
        return "\n".join(lines)

    @staticmethod
    def _format_days(daily_summaries: list[dict[str, Any]]) -> str:
        lines = [
            "## 📅 By Day",
            "",
            "| Day | Logged | Productive | Score |",
            "|---|---|---|---|",
        ]
        for d in daily_summaries:
            if d["total_slots"] == 0:
                lines.append(f"| {d['day_label']} | - | - | - |")
            else:
                lines.append(
                    f"| {d['day_label']} | {d['total_minutes']} min "
                    f"| {d['productive_minutes']} min | {d['productivity_score']}% |"
                )
        return "\n".join(lines)

    @staticmethod
    def _format_insights(insights: list[dict[str, str]]) -> str:
        if not insights:
            return "## 💡 Insights\n\n(nothing to report yet)"
        lines = ["## 💡 Insights", ""]
        for insight in insights:
            lines.append(f"- {INSIGHT_ICONS.get(insight['type'], '-')} {insight['text']}")
        return "\n".join(lines)

    def save(
        self,
        metrics: dict[str, Any],
        start: str,
        end: str,
        period_name: str,
    ) -> str:
        """
        Save the report to a Markdown file.

        Creates the output directory if it doesn't exist.

        Args:
            metrics: A daily or period metrics bundle.
            start: First date of the report (YYYY-MM-DD).
            end: Last date of the report (YYYY-MM-DD).
            period_name: Period name, used in the file name.

        Returns:
            The path to the saved report file.
        """
        os.makedirs(self.output_dir, exist_ok=True)

        filename = f"{self.output_dir}/report_{period_name}_{end}.md"

        content = self.generate_markdown(metrics, start, end, period_name)

        with open(filename, "w", encoding="utf-8") as f:
            f.write(content)

        return filename


class ConsolePrinter:
    """
    Utility class for console output.

    All methods are static and handle printing progress messages,
    statistics, and reports to the console with consistent formatting.
    """

    @staticmethod
    def print_header() -> None:
        """Print the application header banner."""
        print("=" * 50)
        print("⏱️  TimeFlow")
        print("=" * 50)

    @staticmethod
    def print_period(period_name: str, start: str, end: str) -> None:
        """
        Print the report time period.

        Args:
            period_name: Period name.
            start: First date.
            end: Last date.
        """
        span = start if start == end else f"{start} ~ {end}"
        print(f"\n📅 {period_name}: {span}")

    @staticmethod
    def print_warning(message: str) -> None:
        """Print a non-fatal warning."""
        print(f"⚠️  {message}")

    @staticmethod
    def print_logged(date_str: str, slot_id: str, activity: str, category: str) -> None:
        """
        Print the confirmation for a logged slot.

        Args:
            date_str: The date of the entry.
            slot_id: The slot id.
            activity: The logged activity.
            category: The category id (may be empty).
        """
        suffix = f" [{category}]" if category else ""
        print(f"\n📝 {date_str} {slot_id}: {activity}{suffix}")

    @staticmethod
    def print_cleared(date_str: str, slot_id: str) -> None:
        """Print the confirmation for a cleared slot."""
        print(f"\n🧽 {date_str} {slot_id}: cleared")

    @staticmethod
    def print_stats_summary(metrics: dict[str, Any]) -> None:
        """
        Print a summary of the computed metrics.

        Args:
            metrics: A daily or period metrics bundle.
        """
        print(f"   - Time logged: {metrics['total_hours']}h")
        print(f"   - Productivity: {metrics['productivity_score']}%")
        print(f"   - Longest streak: {metrics['max_streak']} min")
        print(f"   - Peak hour: {metrics['peak_hour_label']}")
        if "daily_summaries" in metrics:
            print(f"   - Days logged: {metrics['days_with_data']}/{metrics['total_days']}")
            print(f"   - Avg per day: {metrics['avg_minutes_per_day']} min")

    @staticmethod
    def print_insights(insights: list[dict[str, str]]) -> None:
        """
        Print the insight messages.

        Args:
            insights: Insight dictionaries with "type" and "text".
        """
        if not insights:
            return
        print("\n💡 Insights:")
        for insight in insights:
            print(f"   {INSIGHT_ICONS.get(insight['type'], '-')} {insight['text']}")

    @staticmethod
    def print_saved(filename: str) -> None:
        """
        Print the report saved confirmation.

        Args:
            filename: Path to the saved report file.
        """
        print(f"\n💾 Report saved: {filename}")

    @staticmethod
    def print_exported(filename: str) -> None:
        """Print the backup export confirmation."""
        print(f"\n📦 Backup written: {filename}")

    @staticmethod
    def print_imported(count: int) -> None:
        """Print the backup import confirmation."""
        print(f"\n📥 Imported {count} day(s)")

    @staticmethod
    def print_error(message: str) -> None:
        """
        Print an error message.

        Args:
            message: The error message to display.
        """
        print(f"❌ {message}")
