import asyncio
import os
import tempfile

from fbstorage import EnvAuthenticationClient, StorageClient, UploadProgress


def on_progress(e: UploadProgress) -> None:
    print(f"progress: {e.bytes_transferred}/{e.total_bytes} bytes ({e.percentage}%) {e.avg_speed}")


async def main() -> None:
    assert os.getenv("FIREBASE_ID_TOKEN"), "Set FIREBASE_ID_TOKEN"
    assert os.getenv("FIREBASE_PROJECT_ID"), "Set FIREBASE_PROJECT_ID"

    async with StorageClient(EnvAuthenticationClient()) as storage:
        # 1) Upload a local file into a folder
        with tempfile.NamedTemporaryFile("wb", suffix=".txt", delete=False) as tmp:
            tmp.write(b"hello from python" * 4096)
            tmp_local_path = tmp.name
        try:
            url = await storage.upload_file(tmp_local_path, "examples/assets", on_progress=on_progress)
            print("uploaded:", url)
        finally:
            os.unlink(tmp_local_path)

        # 2) Address the same object through a chain of children
        name = os.path.basename(tmp_local_path)
        resource = storage.resource("examples").child("assets").child(name)
        meta = await resource.get_metadata()
        print("metadata:", meta.name, meta.size, meta.content_type)

        # 3) List everything below examples/
        for item in await storage.resource("examples").list_items(recursive=True):
            print(" -", item)

        # 4) Delete
        await resource.delete()
        print("download url after delete:", repr(await resource.get_download_url()))


if __name__ == "__main__":
    asyncio.run(main())
