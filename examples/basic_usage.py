"""Example: basic usage of student-records."""

from student_records import RecordStore, StoreConfig

store = RecordStore(StoreConfig(table_size=50))

# 1, 51 and 101 all land in bucket 1
for student_id, name, grade in [(1, "Ada", "A"), (51, "Ben", "B+"), (101, "Cy", "A-")]:
    result = store.insert(student_id, name, grade)
    print(f"insert {student_id}: {result.status} (bucket {store.hash_index(student_id)})")

print(f"insert 51 again: {store.insert(51, 'Dup', 'F').status}")

found = store.find(51)
if found.ok:
    print(f"found: {found.record.name} / {found.record.grade}")

print(f"delete 51: {store.delete(51).status}")
print(f"find 51: {store.find(51).status}")

for record in store.list_all():
    print(f"  {record.student_id:<5} {record.name:<20} {record.grade}")

print(f"released {store.teardown()} record(s)")
