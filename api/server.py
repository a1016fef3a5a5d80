# python api/server.py
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent.absolute()
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from flask import Flask, jsonify, request

from config.config import get_data_path, get_port, get_refresh_secret
from etl.data_store import FacultyStore, StoreReadError
from etl.refresh_data import RefreshInProgressError, refresh_faculty_data, sheets_fetcher


def create_app(store=None, fetch_tables=None, refresh_secret=None) -> Flask:
    """
    Build the API app. Arguments default to the configured store, the Google Sheets
    fetcher and REFRESH_SECRET_KEY; tests pass fakes.
    """
    app = Flask(__name__)
    app.config["STORE"] = store or FacultyStore(get_data_path())
    app.config["FETCH_TABLES"] = fetch_tables or sheets_fetcher()
    app.config["REFRESH_SECRET_KEY"] = refresh_secret if refresh_secret is not None else get_refresh_secret()

    @app.after_request
    def _allow_cors(response):
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        return response

    # ── Faculty data ──────────────────────────────────────────────────────────
    @app.route("/api/faculty", methods=["GET"])
    def get_faculty():
        faculty_id = request.args.get("facultyId")
        store: FacultyStore = app.config["STORE"]
        try:
            if not faculty_id:
                return jsonify(store.load())
            doc = store.find(faculty_id)
            if doc is None:
                return jsonify({
                    "message": f'Faculty with ID "{faculty_id}" not found',
                    "availableIds": store.ids(),
                }), 404
        except StoreReadError as e:
            print(f"[ERROR] Error reading faculty data: {e}", file=sys.stderr)
            return jsonify({"message": "Error reading faculty data from database"}), 500
        return jsonify(doc)

    # ── Refresh from Google Sheets ────────────────────────────────────────────
    @app.route("/api/fetchLatest/<secret_key>", methods=["GET"])
    def fetch_latest(secret_key):
        expected = app.config["REFRESH_SECRET_KEY"]
        if not expected or secret_key != expected:
            return jsonify({"message": "Unauthorized - Invalid secret key", "success": False}), 401

        try:
            result = refresh_faculty_data(app.config["STORE"], app.config["FETCH_TABLES"])
        except RefreshInProgressError as e:
            return jsonify({"message": str(e), "success": False}), 409
        except Exception as e:
            print(f"[ERROR] Error fetching from Google Sheets: {e}", file=sys.stderr)
            return jsonify({
                "message": f"Error fetching data from Google Sheets: {e}",
                "success": False,
            }), 500

        print(f"[OK] Refreshed {result.total_faculty} faculty documents")
        return jsonify({
            "message": "Database updated successfully from Google Sheets",
            "success": True,
            "totalFaculty": result.total_faculty,
            "facultyIds": result.faculty_ids,
            "timestamp": result.timestamp,
        })

    # ── Health ────────────────────────────────────────────────────────────────
    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "Backend running"})

    return app


if __name__ == "__main__":
    port = get_port()
    print(f"[OK] Server running on http://localhost:{port}")
    create_app().run(host="0.0.0.0", port=port)
