"""Benchmark for torrent creation throughput.

Measures piece hashing and whole-file MD5 cataloging over a generated
payload at different piece sizes and file counts.
"""

import argparse
import os
import statistics
import tempfile
import time
from pathlib import Path
from typing import Any, Dict

from torrentsmith.core.catalog import build_catalog, iter_files
from torrentsmith.core.creator import TorrentCreator
from torrentsmith.core.hasher import hash_pieces
from torrentsmith.models import PieceSize


class PieceHashingBenchmark:
    """Benchmark torrent creation performance."""

    def __init__(self, payload_mb: int):
        self.payload_mb = payload_mb
        self.results = {}

    def setup_payload(self, root: Path, num_files: int) -> Path:
        """Write ``num_files`` random files adding up to the payload size."""
        payload = root / f"payload_{num_files}"
        payload.mkdir()
        total = self.payload_mb * 1024 * 1024
        per_file = total // num_files
        for index in range(num_files):
            subdir = payload / f"dir_{index % 8}"
            subdir.mkdir(exist_ok=True)
            (subdir / f"file_{index:05d}.bin").write_bytes(os.urandom(per_file))
        return payload

    def benchmark_piece_hashing(self, payload: Path, piece_size: PieceSize) -> Dict[str, float]:
        """Benchmark SHA-1 piece hashing at one piece size."""
        files = iter_files(payload)
        total = sum(path.stat().st_size for path in files)

        start_time = time.perf_counter()
        digests = hash_pieces(files, piece_size.value)
        duration = time.perf_counter() - start_time

        return {
            "duration": duration,
            "pieces_per_second": len(digests) / duration,
            "mb_per_second": total / duration / 1024 / 1024,
            "total_pieces": len(digests),
        }

    def benchmark_catalog(self, payload: Path) -> Dict[str, float]:
        """Benchmark whole-file MD5 cataloging."""
        start_time = time.perf_counter()
        entries = build_catalog(payload)
        duration = time.perf_counter() - start_time

        total = sum(entry.size_bytes for entry in entries)
        return {
            "duration": duration,
            "files_per_second": len(entries) / duration,
            "mb_per_second": total / duration / 1024 / 1024,
        }

    def benchmark_create(self, payload: Path) -> Dict[str, float]:
        """Benchmark a complete torrent build with automatic piece size."""
        start_time = time.perf_counter()
        torrent = TorrentCreator().create(payload, payload.name, "http://tracker.example.com/announce")
        duration = time.perf_counter() - start_time

        return {
            "duration": duration,
            "torrent_bytes": len(torrent),
            "mb_per_second": self.payload_mb / duration,
        }

    def run_benchmark(self, benchmark_name: str, benchmark_func, *args) -> Dict[str, Any]:
        """Run a single benchmark three times and summarize numeric results."""
        print(f"Running {benchmark_name}...")

        results = [benchmark_func(*args) for _ in range(3)]
        final_result: Dict[str, Any] = {}
        for key in results[0]:
            values = [r[key] for r in results]
            final_result[key] = {
                "mean": statistics.mean(values),
                "std": statistics.stdev(values) if len(values) > 1 else 0,
            }
        return final_result

    def run_all_benchmarks(self, file_counts):
        """Run all benchmarks."""
        print("Starting Piece Hashing Benchmarks")
        print("=" * 50)

        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            for num_files in file_counts:
                payload = self.setup_payload(root, num_files)

                for piece_size in (PieceSize.SIZE_64KIB, PieceSize.SIZE_1MIB, PieceSize.SIZE_16MIB):
                    name = f"Piece Hashing ({num_files} files, {piece_size.label})"
                    self.results[name] = self.run_benchmark(
                        name, self.benchmark_piece_hashing, payload, piece_size
                    )

                name = f"MD5 Catalog ({num_files} files)"
                self.results[name] = self.run_benchmark(name, self.benchmark_catalog, payload)

                name = f"Create Torrent ({num_files} files)"
                self.results[name] = self.run_benchmark(name, self.benchmark_create, payload)

        print("\n" + "=" * 50)
        print("Benchmark Summary:")
        for name, result in self.results.items():
            print(f"  {name}: {result['mb_per_second']['mean']:.1f} MB/s")

    def save_results(self, filename: str):
        """Save benchmark results to file."""
        import json

        with open(filename, "w") as f:
            json.dump(self.results, f, indent=2)

        print(f"Results saved to {filename}")


def main():
    """Main benchmark function."""
    parser = argparse.ArgumentParser(description="Torrent Creation Performance Benchmark")
    parser.add_argument("--size-mb", type=int, default=64, help="Payload size in MiB")
    parser.add_argument(
        "--files",
        type=int,
        nargs="+",
        default=[1, 100],
        help="File counts to benchmark",
    )
    parser.add_argument("--output", "-o", default="piece_hashing_results.json",
                      help="Output file for results")
    args = parser.parse_args()

    benchmark = PieceHashingBenchmark(args.size_mb)
    benchmark.run_all_benchmarks(args.files)
    benchmark.save_results(args.output)


if __name__ == "__main__":
    main()
