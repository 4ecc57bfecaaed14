"""
Seed script — submits a handful of sample analyses for demo purposes.

Usage:
    python -m scripts.seed_analyses

This creates one analysis per language plus an upload:
- SomniaToken.sol   (outdated pragma, reentrancy, tx.origin)
- GameLogic.js      (var, loose equality, console.log)
- DataProcessor.py  (bare except, eval, global, hardcoded secret)
- config.txt upload (falls back to JavaScript rules)

Run this after `uvicorn api.main:app` to populate the dashboard with data.
"""

from client.poller import AnalysisClient, BASE_URL

SAMPLES = [
    {
        "filename": "SomniaToken.sol",
        "language": "solidity",
        "code": (
            "pragma solidity ^0.7.0;\n"
            "contract SomniaToken {\n"
            "    mapping(address => uint) balances;\n"
            "    function withdraw(uint amount) public {\n"
            "        require(tx.origin == owner);\n"
            "        msg.sender.call{value: amount}(\"\");\n"
            "        balances[msg.sender] -= amount;\n"
            "    }\n"
            "}"
        ),
    },
    {
        "filename": "GameLogic.js",
        "language": "javascript",
        "code": (
            "var score = 0;\n"
            "function gameLoop(state) {\n"
            "    if (state.lives == 0) {\n"
            "        console.log('game over', score);\n"
            "    }\n"
            "    // TODO: frame limiter\n"
            "}"
        ),
    },
    {
        "filename": "DataProcessor.py",
        "language": "python",
        "code": (
            "api_key = 'sk-demo-123'\n"
            "def process_data(rows):\n"
            "    global cache\n"
            "    try:\n"
            "        return [eval(r) for r in rows]\n"
            "    except:\n"
            "        return []"
        ),
    },
]


def seed():
    client = AnalysisClient(BASE_URL)

    print(f"Submitting {len(SAMPLES) + 1} analyses to {BASE_URL}...\n")

    submitted = [client.submit(**sample) for sample in SAMPLES]
    submitted.append(client.upload("config.txt", b"password = \"hunter2\"\n"))

    for analysis in submitted:
        done = client.wait_for_result(analysis["id"])
        summary = (done.get("results") or {}).get("summary", {})
        print(
            f"  [{done['status']}] {done['filename']} ({done['language']}) "
            f"id={done['id'][:8]}... issues={summary.get('total', 0)}"
        )

    print("\nDone!")
    print(f"Stats:   curl {BASE_URL}/api/stats")
    print(f"Recent:  curl {BASE_URL}/api/analyses/recent")


if __name__ == "__main__":
    seed()
