"""
Export functionality for tournament tables, Excel workbooks and the console.
"""

import pandas as pd
from typing import List, Optional

from .models import Tournament, Role
from .config import SchedulerConfig
from .fairness import match_tension, team_strength

# Column order expected by the live tracker: defenders before attackers.
TABLE_COLUMNS = ['game', 'RD', 'RA', 'BD', 'BA', 'score_red', 'score_blue', 'tension']


def table_dataframe(tournament: Tournament) -> pd.DataFrame:
    """Tournament table with blank score columns to be filled in during play."""
    ratings = tournament.ratings
    rows = []
    for game_no, match in enumerate(tournament.schedule, start=1):
        row = {'game': game_no}
        for role in Role:
            row[role.value] = tournament.name_of(match[role.index])
        row['score_red'] = None
        row['score_blue'] = None
        row['tension'] = round(match_tension(match, ratings), 1)
        rows.append(row)

    return pd.DataFrame(rows, columns=TABLE_COLUMNS)


def write_table_csv(tournament: Tournament, output_path: str) -> None:
    """Write the tournament table CSV."""
    df = table_dataframe(tournament)
    df.to_csv(output_path, index=False)
    print(f"Saved schedule to '{output_path}'.")


def write_excel(tournament: Tournament, config: SchedulerConfig, output_path: str) -> None:
    """
    Write the schedule to an Excel file with summary sheets.

    Args:
        tournament: Tournament to export
        config: Scheduler configuration
        output_path: Path to output Excel file
    """
    print(f"Writing schedule to {output_path}")

    with pd.ExcelWriter(output_path, engine='xlsxwriter') as writer:
        _write_schedule_sheet(tournament, config, writer)

        if config.output.include_summaries:
            _write_player_sheet(tournament, config, writer)
            _write_score_sheet(tournament, config, writer)

    print(f"Schedule exported successfully to {output_path}")


def _write_schedule_sheet(tournament: Tournament, config: SchedulerConfig, writer) -> None:
    """Write the main schedule sheet."""
    df = tournament.to_dataframe()

    if df.empty:
        print("Warning: No games to export")
        return

    ratings = tournament.ratings
    df['Red Elo'] = [
        team_strength(ratings[m[0] - 1], ratings[m[1] - 1]) for m in tournament.schedule
    ]
    df['Blue Elo'] = [
        team_strength(ratings[m[2] - 1], ratings[m[3] - 1]) for m in tournament.schedule
    ]
    df = df[['Game', 'RA', 'RD', 'BA', 'BD', 'Red Elo', 'Blue Elo', 'Tension']]

    sheet_name = config.output.sheets.get('schedule', 'Schedule')
    df.to_excel(writer, sheet_name=sheet_name, index=False)

    worksheet = writer.sheets[sheet_name]
    workbook = writer.book
    _format_schedule_worksheet(worksheet, workbook, df)

    summary_row = len(df) + 2
    worksheet.write(summary_row, 0, 'Fairness Score')
    worksheet.write(summary_row, 1, round(tournament.score, 2))


def _write_player_sheet(tournament: Tournament, config: SchedulerConfig, writer) -> None:
    """Write which game each player plays in each position."""
    sheet_name = config.output.sheets.get('players', 'Players')

    player_data = []
    for competitor in tournament.competitors:
        row = {'Player': competitor.name, 'Elo': competitor.rating}
        for game_no, role in tournament.get_player_schedule(competitor.id):
            row[role.value] = game_no
        player_data.append(row)

    df = pd.DataFrame(player_data, columns=['Player', 'Elo'] + [r.value for r in Role])
    df = df.sort_values('Elo', ascending=False)
    df.to_excel(writer, sheet_name=sheet_name, index=False)


def _write_score_sheet(tournament: Tournament, config: SchedulerConfig, writer) -> None:
    """Write summary statistics of every sampled score."""
    sheet_name = config.output.sheets.get('scores', 'Score Distribution')

    stats = tournament.result.summary()
    if not stats:
        return

    stats_df = pd.DataFrame([{
        'Trials': stats['count'],
        'Workers': tournament.result.workers,
        'Best': stats['min'],
        'Worst': stats['max'],
        'Median': stats['median'],
        'Mean': stats['mean'],
    }])
    stats_df.to_excel(writer, sheet_name=sheet_name, index=False)

    # Histogram of sampled scores below the statistics
    buckets = pd.cut(pd.Series(tournament.result.scores), bins=min(20, stats['count']))
    histogram = buckets.value_counts(sort=False).reset_index()
    histogram.columns = ['Score Range', 'Count']
    histogram['Score Range'] = histogram['Score Range'].astype(str)
    histogram.to_excel(writer, sheet_name=sheet_name, startrow=len(stats_df) + 3, index=False)


def _format_schedule_worksheet(worksheet, workbook, df: pd.DataFrame) -> None:
    """Apply formatting to the schedule worksheet."""
    header_format = workbook.add_format({
        'bold': True,
        'text_wrap': True,
        'valign': 'top',
        'fg_color': '#D7E4BC',
        'border': 1
    })
    number_format = workbook.add_format({'num_format': '0.0'})

    column_widths = {
        'Game': 6,
        'RA': 18,
        'RD': 18,
        'BA': 18,
        'BD': 18,
    }

    for i, col in enumerate(df.columns):
        if col in ('Red Elo', 'Blue Elo', 'Tension'):
            worksheet.set_column(i, i, 10, number_format)
        else:
            worksheet.set_column(i, i, column_widths.get(col, 12))

    for col_num, value in enumerate(df.columns.values):
        worksheet.write(0, col_num, value, header_format)

    # Highlight the most lopsided games
    tension_col = df.columns.get_loc('Tension')
    worksheet.conditional_format(1, tension_col, len(df), tension_col, {
        'type': 'top',
        'value': 10,
        'criteria': '%',
        'format': workbook.add_format({'bg_color': '#FFC7CE'})
    })


def format_schedule(tournament: Tournament, col_width: int = 16) -> str:
    """Render the schedule as a fixed-width console table."""
    sep = " | "
    width = 6 + (col_width + len(sep)) * 5 + 10
    ratings = tournament.ratings

    lines: List[str] = []
    lines.append("=" * width)
    lines.append("  OPTIMISED FOOSBALL SCHEDULE")
    lines.append("  Each player plays exactly 4 games, one per position")
    lines.append("=" * width)

    header = "Game".rjust(6) + sep + sep.join(r.value.rjust(col_width) for r in Role)
    lines.append(header + sep + "Tension".ljust(10))
    lines.append("-" * width)

    total = 0.0
    for game_no, match in enumerate(tournament.schedule, start=1):
        tension = match_tension(match, ratings)
        total += tension
        names = [tournament.name_of(pid).ljust(col_width) for pid in match]
        lines.append(str(game_no).rjust(6) + sep + sep.join(names) + sep + f"{tension:.1f}".rjust(10))

    lines.append("=" * width)
    lines.append(f"  Fairness Score (minimised): {total:.2f}")
    lines.append("=" * width)
    return "\n".join(lines)


def format_score_summary(tournament: Tournament) -> Optional[str]:
    """One-line summary of the sampled score distribution."""
    stats = tournament.result.summary()
    if not stats:
        return None
    return (f"Sampled {stats['count']} schedules: best {stats['min']:.2f}, "
            f"median {stats['median']:.2f}, worst {stats['max']:.2f}")
