import argparse

from huffpack.codec import decompress_file
from huffpack.io import change_extension


def main(argv=None):
    parser = argparse.ArgumentParser(description="Huffman decompressor")
    parser.add_argument("input", help="Container path (.huff)")
    parser.add_argument("--extension", default=".out", help="Target extension, including the dot")
    parser.add_argument("--output", help="Explicit output path; overrides --extension")
    args = parser.parse_args(argv)

    output = args.output or change_extension(args.input, args.extension)
    print("Starting decompression process...")
    input_size, output_size = decompress_file(args.input, output)
    print(f"Container size: {input_size} bytes")
    print(f"Restored size: {output_size} bytes")
    print(f"File extracted successfully: {output}")
    return output


if __name__ == "__main__":
    main()
