"""
Assignment Visualization Tool

Creates visual representations of saved worksite assignments.
Run: python scripts/visualize_schedule.py <assignments_file.json> [--html]
"""

import html as html_mod
import json
import os
import sys
from collections import defaultdict

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from worksite_assigner.sessions import ALL_SESSIONS


def build_grid(data: dict) -> dict:
    """team -> session -> list of client names"""
    roster = data.get('roster') or list(data.get('team_sessions', {}).keys())
    grid = {team: defaultdict(list) for team in roster}
    for a in data.get('assignments', []):
        grid.setdefault(a['team'], defaultdict(list))[a['session']].append(a['client'])
    return grid


def visualize_schedule_text(assignments_file: str, output_file: str = None) -> str:
    """Create a text-based team x session grid"""

    with open(assignments_file, 'r') as f:
        data = json.load(f)

    grid = build_grid(data)
    width = 22

    output = []
    output.append("=" * (14 + width * len(ALL_SESSIONS)))
    output.append("WORKSITE TEAM ASSIGNMENTS")
    output.append("=" * (14 + width * len(ALL_SESSIONS)))
    output.append(f"{'Team':<14}" + "".join(f"{s:<{width}}" for s in ALL_SESSIONS))
    output.append("-" * (14 + width * len(ALL_SESSIONS)))

    for team, sessions in grid.items():
        cells = []
        for session in ALL_SESSIONS:
            names = ", ".join(sessions.get(session, [])) or "-"
            cells.append(f"{names[:width - 2]:<{width}}")
        output.append(f"{team[:13]:<14}" + "".join(cells))

    shortfalls = data.get('shortfalls', [])
    if shortfalls:
        output.append("")
        output.append("SHORTFALLS")
        for s in shortfalls:
            where = f" at {s['session']}" if s.get('session') else ""
            output.append(f"  {s['client']}: {s['assigned']}/{s['requested']} {s['kind']}s{where}")

    result = "\n".join(output)
    print(result)

    if output_file:
        with open(output_file, 'w') as f:
            f.write(result)
        print(f"\n✓ Visualization saved to: {output_file}")

    return result


def create_html_visualization(assignments_file: str, output_file: str = "assignments_visualization.html") -> str:
    """Create an HTML table with one row per team and one column per session"""

    with open(assignments_file, 'r') as f:
        data = json.load(f)

    grid = build_grid(data)
    loads = data.get('analysis', {}).get('team_loads', {})

    html_parts = ["""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>Worksite Team Assignments</title>
<style>
body { font-family: sans-serif; margin: 2em; color: #2d3748; }
table { border-collapse: collapse; width: 100%; }
th, td { border: 1px solid #e2e8f0; padding: 6px 10px; text-align: left; vertical-align: top; }
th { background: #edf2f7; }
td.empty { color: #a0aec0; }
</style>
</head>
<body>
<h1>Worksite Team Assignments</h1>
<table>
<tr><th>Team</th><th>Load</th>"""]

    html_parts.extend(f"<th>{html_mod.escape(s)}</th>" for s in ALL_SESSIONS)
    html_parts.append("</tr>\n")

    for team, sessions in grid.items():
        html_parts.append(f"<tr><td>{html_mod.escape(team)}</td><td>{loads.get(team, '')}</td>")
        for session in ALL_SESSIONS:
            names = sessions.get(session, [])
            if names:
                html_parts.append(f"<td>{'<br>'.join(html_mod.escape(n) for n in names)}</td>")
            else:
                html_parts.append('<td class="empty">-</td>')
        html_parts.append("</tr>\n")

    html_parts.append("</table>\n")

    requirements = data.get('requirements', [])
    if requirements:
        html_parts.append("<h2>Requirements</h2>\n<table>\n")
        html_parts.append("<tr><th>Client Name</th><th>Date Requested</th><th>Sessions Needed</th><th>Teams Required</th></tr>\n")
        for row in requirements:
            html_parts.append(
                f"<tr><td>{html_mod.escape(row['name'])}</td><td>{html_mod.escape(row['date_requested'])}</td>"
                f"<td>{row['sessions_needed']}</td><td>{row['teams_needed']}</td></tr>\n"
            )
        html_parts.append("</table>\n")

    html_parts.append("</body>\n</html>\n")

    html = ''.join(html_parts)
    with open(output_file, 'w', encoding='utf-8') as f:
        f.write(html)

    print(f"✓ HTML visualization created: {output_file}")
    print(f"  Open in browser: file://{os.path.abspath(output_file)}")

    return html


def main():
    if len(sys.argv) < 2:
        print("Usage: python scripts/visualize_schedule.py <assignments_file.json> [--html]")
        sys.exit(1)

    assignments_file = sys.argv[1]

    if not os.path.exists(assignments_file):
        print(f"Error: File not found: {assignments_file}")
        sys.exit(1)

    os.makedirs("visualizations", exist_ok=True)

    stem = os.path.splitext(os.path.basename(assignments_file))[0]
    visualize_schedule_text(assignments_file, f"visualizations/{stem}.txt")

    if '--html' in sys.argv:
        create_html_visualization(assignments_file, f"visualizations/{stem}.html")


if __name__ == "__main__":
    main()
