import matplotlib

matplotlib.use("Agg")  # no display needed, we only save to file
import matplotlib.pyplot as plt

from .profiler import ProfileResult


def plot_latencies(result: ProfileResult, path: str) -> str:
    """
    Plot per-request latency for a profiling run and save it to ``path``.
    X-axis: request number, Y-axis: milliseconds.
    Horizontal lines mark the mean and median.
    """
    times = result.times_ms
    requests = list(range(1, len(times) + 1))
    failed = [(i, m.elapsed_ms) for i, m in zip(requests, result.measurements) if not m.succeeded]

    plt.figure(figsize=(10, 6))
    plt.plot(requests, times, marker='o', linewidth=1, markersize=4,
             color='blue', label='Latency')
    if failed:
        plt.scatter([i for i, _ in failed], [t for _, t in failed],
                    color='red', zorder=3, label='Non-2xx')
    plt.axhline(result.mean_ms, color='orange', linestyle='--',
                label=f'Mean ({result.mean_ms} ms)')
    plt.axhline(result.median_ms, color='green', linestyle=':',
                label=f'Median ({result.median_ms} ms)')

    plt.xlabel('Request', fontsize=12)
    plt.ylabel('Response time (ms)', fontsize=12)
    plt.title(f'Response time per request\n{result.target.url}', fontsize=14)
    plt.grid(True, alpha=0.3)
    plt.ylim(bottom=0)
    plt.legend(loc='upper right', fontsize=10)

    plt.tight_layout()
    plt.savefig(path, dpi=150)
    plt.close()
    return path
