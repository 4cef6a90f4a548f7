from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/members/ranking", methods=["GET"], endpoint="api_members_ranking")
    def api_members_ranking():
        container.ranking.recompute()
        rows = [
            {
                "member_id": m.member_id,
                "full_name": m.full_name,
                "total_hours": round(m.total_hours, 2),
                "rank": m.rank,
                "is_blocked": m.is_blocked,
            }
            for m in container.ranking.leaderboard()
        ]
        return jsonify({"success": True, "ranking": rows}), 200
