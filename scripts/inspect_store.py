"""Print a summary of a recruitment snapshot file.

Usage:
  python scripts/inspect_store.py [path/to/db.json]
"""

import os, sys

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from collections import Counter

from hrms.store import EntityStore


def inspect(path):
    print(f"\n=== {path} ===")
    if not os.path.exists(path):
        print("missing")
        return
    store = EntityStore(path)
    for name, count in sorted(store.counts().items()):
        print(f"{name}: {count}")
    print('candidate status:', dict(Counter(c.status.value for c in store.find_all('candidates'))))
    print('interview status:', dict(Counter(i.status.value for i in store.find_all('interviews'))))
    print('verification status:', dict(Counter(v.status.value for v in store.find_all('backgroundVerifications'))))
    # dangling references are the usual symptom of hand-edited snapshots
    candidate_ids = {c.id for c in store.find_all('candidates')}
    user_ids = {u.get('id') for u in store.find_all('users')}
    for i in store.find_all('interviews'):
        if i.candidate_id not in candidate_ids:
            print(f"interview {i.id}: unknown candidate {i.candidate_id}")
        for uid in i.panel:
            if uid not in user_ids:
                print(f"interview {i.id}: unknown panel member {uid}")
    for v in store.find_all('backgroundVerifications'):
        if v.candidate_id not in candidate_ids:
            print(f"verification {v.id}: unknown candidate {v.candidate_id}")


if __name__ == '__main__':
    paths = sys.argv[1:] or [os.getenv('DATA_FILE', os.path.join(os.getcwd(), 'db.json'))]
    for p in paths:
        inspect(p)
    print('\nDone.')
