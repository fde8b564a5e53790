import argparse

from huffpack.codec import compress_file
from huffpack.io import change_extension


def main(argv=None):
    parser = argparse.ArgumentParser(description="Huffman compressor")
    parser.add_argument("input", help="File to compress")
    parser.add_argument("--output", help="Output container path (default: input with .huff)")
    parser.add_argument("--quiet", action="store_true", help="Do not print the size summary")
    args = parser.parse_args(argv)

    output = args.output or change_extension(args.input, ".huff")
    if not args.quiet:
        print("Starting compression process...")
    input_size, output_size = compress_file(args.input, output)

    if not args.quiet:
        ratio = output_size / input_size if input_size else 0.0
        print(f"Input size: {input_size} bytes")
        print(f"Output size: {output_size} bytes")
        print(f"Compression ratio: {ratio:.3f}x")
        print(f"Compression completed successfully: {output}")
    return output


if __name__ == "__main__":
    main()
