from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/offices", endpoint="offices")
    @login_required
    def offices():
        return jsonify({
            "offices": [
                {
                    "office_id": o.office_id,
                    "name": o.name,
                    "latitude": o.latitude,
                    "longitude": o.longitude,
                    "radius_meters": o.radius_meters,
                }
                for o in container.office_service.list_offices()
            ]
        })

    @app.route("/api/offices/distance", methods=["POST"], endpoint="office_distance")
    @login_required
    def office_distance():
        data = json_body()
        report = container.office_service.distance_report(
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
        )
        return jsonify({"distances": report})
