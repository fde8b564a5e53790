import argparse
import os

from huffpack.codec import compression_stats
from huffpack.io import read_file_bytes


def main(argv=None):
    parser = argparse.ArgumentParser(description="Huffman compression metrics")
    parser.add_argument("inputs", nargs="+", help="Files to measure")
    parser.add_argument("--output-csv", default="", help="Optional CSV report path")
    args = parser.parse_args(argv)

    rows = []
    for path in args.inputs:
        data = read_file_bytes(path)
        if not data:
            print(f"Skipping empty file: {path}")
            continue
        metrics = compression_stats(data)
        metrics["name"] = os.path.basename(path)
        rows.append(metrics)

    if args.output_csv:
        _write_csv(args.output_csv, rows)
    _print_table(rows, args.output_csv)
    return rows


def _write_csv(path, rows):
    if not rows:
        return
    with open(path, "w", encoding="utf-8") as handle:
        handle.write("name,input_bytes,output_bytes,ratio,symbols,tree_height,avg_code_length,entropy\n")
        for row in rows:
            handle.write(
                f"{row['name']},{row['input_bytes']},{row['output_bytes']},{row['ratio']:.4f},"
                f"{row['symbols']},{row['tree_height']},{row['avg_code_length']:.4f},"
                f"{row['entropy']:.4f}\n"
            )


def _print_table(rows, csv_path):
    print("File                 Input    Output   Ratio   Bits/sym  Entropy")
    for row in rows:
        print(
            f"{row['name']:<20} {row['input_bytes']:<8} {row['output_bytes']:<8} "
            f"{row['ratio']:<7.4f} {row['avg_code_length']:<9.4f} {row['entropy']:.4f}"
        )
    if csv_path:
        print(f"Saved CSV: {csv_path}")


if __name__ == "__main__":
    main()
