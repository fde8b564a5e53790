import os
import threading
import time

from flask import Flask, jsonify, request, send_file

from huffpack.codec import compress_with_stats, decompress_file
from huffpack.io import change_extension, read_file_bytes, write_file_bytes


app = Flask(__name__)

BASE_DIR = os.getcwd()
WORK_DIR = os.getenv("HUFFPACK_WORKDIR") or ("/tmp" if os.getenv("VERCEL") else BASE_DIR)

CONFIG = {
    "upload_raw": os.path.join(WORK_DIR, "upload.bin"),
    "upload_huff": os.path.join(WORK_DIR, "upload.huff"),
    "output_huff": os.path.join(WORK_DIR, "output.huff"),
    "output_raw": os.path.join(WORK_DIR, "restored.out"),
    "max_upload": 64 * 1024 * 1024,
}


def _new_job():
    return {"state": "idle", "started": 0.0, "error": "", "output": 0, "stats": {}, "path": ""}


JOBS = {
    "compress": _new_job(),
    "decompress": _new_job(),
}

LOCK = threading.Lock()


def _human_size(num):
    if num <= 0:
        return "0 B"
    for unit in ("B", "KB", "MB", "GB"):
        if num < 1024.0:
            return f"{num:.1f} {unit}"
        num /= 1024.0
    return f"{num:.1f} TB"


def _run_compress(source, target):
    try:
        container, stats = compress_with_stats(read_file_bytes(source))
        write_file_bytes(target, container)
        with LOCK:
            JOBS["compress"].update({"state": "done", "output": len(container), "stats": stats})
    except Exception as exc:
        with LOCK:
            JOBS["compress"].update({"state": "error", "error": str(exc)})


def _run_decompress(source, target):
    try:
        _input_size, output_size = decompress_file(source, target)
        with LOCK:
            JOBS["decompress"].update({"state": "done", "output": output_size})
    except Exception as exc:
        with LOCK:
            JOBS["decompress"].update({"state": "error", "error": str(exc)})


def _reserve_job(job_name):
    with LOCK:
        if JOBS[job_name]["state"] == "running":
            return False
        JOBS[job_name].update(_new_job())
        JOBS[job_name].update({"state": "running", "started": time.time()})
    return True


def _release_job(job_name):
    with LOCK:
        JOBS[job_name].update(_new_job())


def _launch(job_name, target, source, output):
    with LOCK:
        JOBS[job_name]["path"] = output
    thread = threading.Thread(target=target, args=(source, output), daemon=True)
    thread.start()


def _save_upload(path):
    upload = request.files.get("file")
    if upload is None:
        return "missing 'file' field"
    data = upload.read(CONFIG["max_upload"] + 1)
    if len(data) > CONFIG["max_upload"]:
        return "upload too large"
    with open(path, "wb") as handle:
        handle.write(data)
    return ""


@app.route("/")
def landing():
    return jsonify(
        {
            "service": "huffpack",
            "endpoints": ["/api/compress", "/api/decompress", "/api/status/<job>", "/media/<job>"],
        }
    )


@app.route("/api/compress", methods=["POST"])
def api_compress():
    if not _reserve_job("compress"):
        return jsonify({"started": False})
    error = _save_upload(CONFIG["upload_raw"])
    if error:
        _release_job("compress")
        return jsonify({"started": False, "error": error}), 400
    _launch("compress", _run_compress, CONFIG["upload_raw"], CONFIG["output_huff"])
    return jsonify({"started": True})


@app.route("/api/decompress", methods=["POST"])
def api_decompress():
    if not _reserve_job("decompress"):
        return jsonify({"started": False})
    error = _save_upload(CONFIG["upload_huff"])
    if error:
        _release_job("decompress")
        return jsonify({"started": False, "error": error}), 400
    output = CONFIG["output_raw"]
    extension = request.form.get("extension", "")
    if extension:
        output = change_extension(output, extension)
    _launch("decompress", _run_decompress, CONFIG["upload_huff"], output)
    return jsonify({"started": True})


@app.route("/api/status/<job_name>")
def api_status(job_name):
    if job_name not in JOBS:
        return jsonify({"error": "unknown job"}), 404
    with LOCK:
        job = dict(JOBS[job_name])
    return jsonify(
        {
            "state": job["state"],
            "error": job["error"],
            "output": _human_size(job["output"]),
            "output_bytes": job["output"],
            "stats": job["stats"],
        }
    )


@app.route("/media/<job_name>")
def media(job_name):
    if job_name not in JOBS:
        return jsonify({"error": "unknown job"}), 404
    with LOCK:
        state = JOBS[job_name]["state"]
        path = JOBS[job_name]["path"]
    if state != "done" or not path or not os.path.exists(path):
        return "", 404
    return send_file(
        path,
        mimetype="application/octet-stream",
        as_attachment=True,
        download_name=os.path.basename(path),
    )


if __name__ == "__main__":
    port = int(os.getenv("PORT", "5000"))
    app.run(host="0.0.0.0", port=port)
