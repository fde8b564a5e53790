import os


def read_file_bytes(path):
    if not os.path.isfile(path):
        raise ValueError(f"Unable to open input file: {path}")
    with open(path, "rb") as handle:
        return handle.read()


def write_file_bytes(path, data):
    with open(path, "wb") as handle:
        handle.write(data)


def change_extension(path, extension):
    if extension and not extension.startswith("."):
        extension = "." + extension
    root, _ext = os.path.splitext(path)
    return root + extension
