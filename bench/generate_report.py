#!/usr/bin/env python3
"""
Generate a benchmark report comparing tail's line mode and byte mode from
existing benchmark data and plot images.
"""

import os
import pandas as pd
import datetime
import platform
import subprocess

SCENARIO_NOTES = {
    "last_lines": "-n 10: count every line, then skip to the last ten.",
    "from_middle_lines": "-n +N: count every line, then skip to line N.",
    "last_bytes": "-c 1024: take the size from metadata and seek near the end.",
    "from_middle_bytes": "-c +N: take the size from metadata and seek to byte N.",
}

def get_system_info():
    """Collect basic system information for the report."""
    info = {
        "OS": platform.system(),
        "OS Version": platform.release(),
        "Architecture": platform.machine(),
        "Python Version": platform.python_version(),
        "Date": datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
    }

    try:
        if platform.system() == "Darwin":
            cpu_info = subprocess.check_output(["sysctl", "-n", "machdep.cpu.brand_string"]).decode().strip()
            info["CPU"] = cpu_info
        elif platform.system() == "Linux":
            with open("/proc/cpuinfo") as f:
                for line in f:
                    if "model name" in line:
                        info["CPU"] = line.split(":", 1)[1].strip()
                        break
    except (OSError, subprocess.CalledProcessError):
        info["CPU"] = "Unknown"

    return info

def load_results(benchmark_csv):
    df = pd.read_csv(benchmark_csv)
    df_clean = df.copy()
    for column in ['avg_time', 'min_time', 'max_time', 'stdev']:
        df_clean[column] = pd.to_numeric(df_clean[column], errors='coerce')
    df_clean = df_clean.dropna(subset=['avg_time'])
    df_clean['throughput_MBps'] = df_clean['file_size_MB'] / df_clean['avg_time']
    return df_clean

def write_mode_comparison(f, df_clean):
    """Line mode vs byte mode when taking the end of the file, per file size."""
    tail_df = df_clean[df_clean['scenario'].isin(['last_lines', 'last_bytes'])]
    if tail_df.empty:
        return None

    pivot = tail_df.pivot_table(index='file_size_MB', columns='impl', values='avg_time', aggfunc='mean')
    if not {'lines', 'bytes'} <= set(pivot.columns):
        return None
    pivot['speedup'] = pivot['lines'] / pivot['bytes']

    f.write("""
            <h3>Last Part of File: Line Mode vs Byte Mode</h3>
            <table>
                <tr>
                    <th>File Size (MB)</th>
                    <th>lines (s)</th>
                    <th>bytes (s)</th>
                    <th>Byte Mode Speedup</th>
                </tr>
            """)
    for file_size, row in pivot.iterrows():
        lines_cell = f"<td>{row['lines']:.6f}</td>"
        bytes_cell = f"<td>{row['bytes']:.6f}</td>"
        if row['bytes'] < row['lines']:
            bytes_cell = f"<td class='highlight'><strong>{row['bytes']:.6f}</strong></td>"
        else:
            lines_cell = f"<td class='highlight'><strong>{row['lines']:.6f}</strong></td>"
        f.write(f"<tr><td>{file_size}</td>{lines_cell}{bytes_cell}<td>{row['speedup']:.1f}x</td></tr>\n")
    f.write("</table>\n")
    return pivot

def generate_html_report():
    """Generate an HTML report with embedded images and data tables."""
    # Paths are relative to the bench directory
    results_dir = "results"
    plots_dir = os.path.join(results_dir, "plots")
    benchmark_csv = os.path.join(results_dir, "benchmark_results.csv")
    output_report = os.path.join(results_dir, "benchmark_report.html")

    if not os.path.exists(benchmark_csv):
        print(f"Error: Benchmark results not found at {benchmark_csv}")
        return False

    try:
        df_clean = load_results(benchmark_csv)
    except (OSError, ValueError, KeyError) as e:
        print(f"Error loading benchmark data: {e}")
        return False

    try:
        plot_files = [f for f in os.listdir(plots_dir) if f.endswith('.png')]
    except OSError:
        plot_files = []

    system_info = get_system_info()

    with open(output_report, 'w') as f:
        f.write(f"""<!DOCTYPE html>
<html>
<head>
    <title>Tail Benchmark Report</title>
    <style>
        body {{
            font-family: Arial, sans-serif;
            line-height: 1.6;
            margin: 0;
            padding: 20px;
            color: #333;
        }}
        h1, h2, h3 {{
            color: #2c3e50;
        }}
        .container {{
            max-width: 1200px;
            margin: 0 auto;
        }}
        table {{
            border-collapse: collapse;
            width: 100%;
            margin-bottom: 20px;
        }}
        th, td {{
            border: 1px solid #ddd;
            padding: 8px;
            text-align: left;
        }}
        th {{
            background-color: #f2f2f2;
        }}
        tr:nth-child(even) {{
            background-color: #f9f9f9;
        }}
        .plot-container {{
            margin: 20px 0;
            text-align: center;
        }}
        .plot-container img {{
            max-width: 100%;
            height: auto;
            box-shadow: 0 4px 8px rgba(0,0,0,0.1);
        }}
        .section {{
            margin: 40px 0;
            border-top: 1px solid #eee;
            padding-top: 20px;
        }}
        .highlight {{
            background-color: #ffffcc;
        }}
    </style>
</head>
<body>
    <div class="container">
        <h1>Tail Benchmark Report</h1>
        <p>Generated on {system_info["Date"]}</p>

        <div class="section">
            <h2>System Information</h2>
            <table>
                <tr><th>Property</th><th>Value</th></tr>
""")

        for key, value in system_info.items():
            f.write(f"                <tr><td>{key}</td><td>{value}</td></tr>\n")

        f.write("""            </table>
        </div>

        <div class="section">
            <h2>Executive Summary</h2>
            <p>This report compares tail's two extraction strategies. Byte mode reads the file size from metadata and seeks; line mode has to scan the whole file once to count lines before a second pass emits the selected lines.</p>
        """)

        comparison = write_mode_comparison(f, df_clean)

        f.write("""        </div>

        <div class="section">
            <h2>Benchmark Visualizations</h2>
        """)

        for plot_file in sorted(plot_files):
            plot_path = f"plots/{plot_file}"
            plot_title = ' '.join(plot_file.replace('.png', '').replace('_', ' ').title().split())
            f.write(f"""
            <div class="plot-container">
                <h3>{plot_title}</h3>
                <img src="{plot_path}" alt="{plot_title}">
            </div>
            """)

        f.write("""
        </div>

        <div class="section">
            <h2>Scenarios</h2>
            <ul>
        """)

        for scenario in df_clean['scenario'].unique():
            note = SCENARIO_NOTES.get(scenario, "")
            f.write(f"<li><strong>{scenario}</strong>: {note}</li>\n")

        f.write("""
            </ul>
        </div>

        <div class="section">
            <h2>Raw Benchmark Data</h2>
        """)

        # Raw data table (limit to 20 rows max to avoid huge HTML files)
        max_rows = min(20, len(df_clean))
        html_table = df_clean.head(max_rows).to_html(index=False, float_format=lambda x: f"{x:.6f}")
        f.write(html_table)

        if len(df_clean) > max_rows:
            f.write(f"<p>Showing {max_rows} rows out of {len(df_clean)} total. See the CSV file for complete data.</p>")

        f.write("""
        </div>

        <div class="section">
            <h2>Conclusions</h2>
            <ul>
        """)

        if comparison is not None:
            avg_speedup = comparison['speedup'].mean()
            largest = comparison['speedup'].idxmax()
            f.write(f"<li>Byte mode is on average <strong>{avg_speedup:.1f}x</strong> faster than line mode when taking the end of a file.</li>\n")
            f.write(f"<li>The gap is largest for <strong>{largest}MB</strong> files (<strong>{comparison.loc[largest, 'speedup']:.1f}x</strong>).</li>\n")

        f.write("""
                <li>Line mode time grows with file size because of the counting pass.</li>
                <li>Byte mode time stays close to process start-up cost regardless of file size.</li>
            </ul>
        </div>

        <div class="section">
            <p><em>Report generated automatically by the benchmark suite.</em></p>
        </div>
    </div>
</body>
</html>
""")

    print(f"Report generated successfully: {output_report}")
    return True

def main():
    """Main function to generate the report."""
    if not generate_html_report():
        print("Failed to generate report. Please check if benchmark data exists.")
        return 1
    return 0

if __name__ == "__main__":
    exit(main())
