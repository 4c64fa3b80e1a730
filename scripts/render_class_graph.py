import sys
import os
import json
import traceback

# Add project root to path
sys.path.append(os.getcwd())

from classgraph import build_class_graph

INPUT_FILE = os.getenv("CLASSGRAPH_INPUT", "class_records.json")
OUTPUT_FILE = os.getenv("CLASSGRAPH_OUTPUT", "class_graph.dot")


def main():
    print("--- Class Graph Renderer ---")

    if not os.path.exists(INPUT_FILE):
        print(f"Error: {INPUT_FILE} not found. Export the scanned type records first.")
        return 1

    print("Loading type records...")
    try:
        with open(INPUT_FILE, "r") as f:
            data = json.load(f)
        print(f"Loaded {len(data)} records.")
    except (OSError, ValueError) as e:
        print(f"Error loading data: {e}")
        return 1

    try:
        graph = build_class_graph(data)

        stats = graph.get_statistics()
        print(f"\n[INFO] Graph Stats: {stats['types']} types, {stats['relations']} relations")
        print(f"[INFO] Relation types: {stats['relation_types']}")
        if stats["dangling_references"]:
            print(f"[INFO] Ignored {stats['dangling_references']} references to unknown types")

        dot = graph.generate_dot(width=20, height=20)
        with open(OUTPUT_FILE, "w") as f:
            f.write(dot)
        print(f"\nSUCCESS: Wrote {OUTPUT_FILE}")
        print(f"Render it with: dot -Tsvg {OUTPUT_FILE} -o class_graph.svg")
        return 0

    except Exception:
        print("\nCRITICAL ERROR:")
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
