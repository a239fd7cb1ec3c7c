import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns
import os
import numpy as np

# Load results
results_file = os.path.join("bench", "results", "benchmark_results.csv")
if not os.path.exists(results_file):
    print(f"Error: Results file not found: {results_file}")
    exit(1)

df = pd.read_csv(results_file)

# Clean data
df = df.replace("FAIL", np.nan)
for column in ['avg_time', 'min_time', 'max_time', 'stdev']:
    df[column] = pd.to_numeric(df[column], errors='coerce')

df_clean = df.dropna(subset=['avg_time']).copy()

# Throughput is measured against the whole source, since line mode always scans it
df_clean['throughput_MBps'] = df_clean['file_size_MB'] / df_clean['avg_time']

plots_dir = os.path.join("bench", "results", "plots")
os.makedirs(plots_dir, exist_ok=True)

sns.set(style="whitegrid", palette="colorblind", font_scale=1.2)

# --- Plot 1: Execution time by file size for every scenario ---
plt.figure(figsize=(12, 7))
if not df_clean.empty:
    ax = sns.lineplot(
        data=df_clean,
        x="file_size_MB",
        y="avg_time",
        hue="scenario",
        style="impl",
        marker="o",
        linewidth=2.5
    )
    plt.title("Tail Performance by File Size", fontsize=16)
    plt.xlabel("File Size (MB)", fontsize=14)
    plt.ylabel("Execution Time (seconds)", fontsize=14)
    plt.yscale("log")
    plt.xticks(sorted(df_clean['file_size_MB'].unique()))
    plt.legend(title="Scenario", fontsize=12, title_fontsize=13)
    plt.tight_layout()
    plt.savefig(os.path.join(plots_dir, "time_by_file_size.png"))
plt.close()

# --- Plot 2: Last lines vs last bytes ---
plt.figure(figsize=(12, 7))
tail_df = df_clean[df_clean['scenario'].isin(['last_lines', 'last_bytes'])]
if not tail_df.empty:
    ax = sns.lineplot(
        data=tail_df,
        x="file_size_MB",
        y="avg_time",
        hue="impl",
        marker="o",
        linewidth=2.5
    )
    plt.title("Reading the End of a File: Line Mode vs Byte Mode", fontsize=16)
    plt.xlabel("Source File Size (MB)", fontsize=14)
    plt.ylabel("Execution Time (seconds)", fontsize=14)
    plt.yscale("log")
    plt.xticks(sorted(df_clean['file_size_MB'].unique()))
    plt.legend(title="Mode", fontsize=12, title_fontsize=13)
    plt.tight_layout()
    plt.savefig(os.path.join(plots_dir, "last_part_by_mode.png"))
plt.close()

# --- Plot 3: One plot per mode ---
for impl, impl_df in df_clean.groupby('impl'):
    plt.figure(figsize=(14, 8))
    ax = sns.lineplot(
        data=impl_df,
        x="file_size_MB",
        y="avg_time",
        hue="scenario",
        marker="o",
        linewidth=2.5
    )
    plt.title(f"{impl.title()} Mode Scenarios", fontsize=16)
    plt.xlabel("File Size (MB)", fontsize=14)
    plt.ylabel("Execution Time (seconds)", fontsize=14)
    plt.yscale("log")
    plt.legend(title="Scenario", fontsize=12, title_fontsize=13)
    plt.tight_layout()
    plt.savefig(os.path.join(plots_dir, f"{impl}_mode_scenarios.png"))
    plt.close()

# --- Plot 4: Throughput comparison (MB/s of source handled) ---
plt.figure(figsize=(14, 8))
if not df_clean.empty:
    ax = sns.barplot(
        data=df_clean.sort_values('throughput_MBps', ascending=False),
        x="scenario",
        y="throughput_MBps",
        hue="file_size_MB",
        palette="viridis",
        errorbar=None
    )
    plt.title("Source Throughput by Scenario", fontsize=16)
    plt.xlabel("Scenario", fontsize=14)
    plt.ylabel("Throughput (MB/s)", fontsize=14)
    plt.legend(title="File Size (MB)", fontsize=12, title_fontsize=13)
    plt.xticks(rotation=45)
    plt.tight_layout()
    plt.savefig(os.path.join(plots_dir, "throughput_comparison.png"))
plt.close()

# --- Create a summary table ---
print("\nPerformance Summary:")
print("-" * 80)

summary = df_clean.groupby(['impl', 'scenario']).agg({
    'avg_time': ['mean', 'min', 'max'],
    'stdev': 'mean',
    'throughput_MBps': ['mean', 'max']
}).reset_index()

summary_file = os.path.join("bench", "results", "performance_summary.csv")
summary.to_csv(summary_file)
print(f"Summary saved to {summary_file}")

print("\nLine Mode vs Byte Mode (last part of file):")
print("-" * 80)
comparison = tail_df.pivot_table(index='file_size_MB', columns='impl', values='avg_time', aggfunc='mean')
if {'lines', 'bytes'} <= set(comparison.columns):
    comparison['speedup'] = comparison['lines'] / comparison['bytes']
print(comparison)

print("\nAnalysis complete. Plots saved to bench/results/plots/")
