import threading
import time

from arkconfig.session import ConfigFileId, ConfigSession
from arkconfig.watcher import ExternalChangeWatcher, WatcherState

FILE = ConfigFileId("1", "GameUserSettings")


def _watcher(storage, interval=0.01):
    session = ConfigSession(FILE, storage.read_config("1", "GameUserSettings"))
    mtime = storage.get_config_modified_time("1", "GameUserSettings")
    return ExternalChangeWatcher(storage, FILE, session, interval=interval, last_known_mtime=mtime)


def test_unchanged_mtime_never_reloads(memory_storage):
    watcher = _watcher(memory_storage)
    results = [watcher.poll_once() for _ in range(10)]
    assert results == [False] * 10
    assert watcher.reload_count == 0


def test_single_change_reloads_once(memory_storage):
    watcher = _watcher(memory_storage)
    memory_storage.write_external("1", "GameUserSettings", "[ServerSettings]\nXPMultiplier=9.0\n")
    assert watcher.poll_once() is True
    assert watcher.poll_once() is False
    assert watcher.reload_count == 1
    assert watcher.session.get_setting("ServerSettings", "XPMultiplier") == "9.0"
    assert not watcher.session.has_changes()


def test_external_change_overwrites_local_edits(memory_storage):
    watcher = _watcher(memory_storage)
    watcher.session.update_setting("ServerSettings", "SessionName", "Local")
    memory_storage.write_external("1", "GameUserSettings", "[ServerSettings]\nSessionName=Disk\n")
    watcher.poll_once()
    assert watcher.session.get_setting("ServerSettings", "SessionName") == "Disk"


def test_own_save_is_not_an_external_change(memory_storage):
    watcher = _watcher(memory_storage)
    session = watcher.session
    session.update_setting("ServerSettings", "XPMultiplier", "2.0")
    memory_storage.save_config("1", "GameUserSettings", session.serialize_for_save())
    session.commit(memory_storage.get_config_modified_time("1", "GameUserSettings"))
    assert watcher.poll_once() is False
    assert watcher.reload_count == 0


def test_zero_mtime_is_ignored(memory_storage):
    watcher = _watcher(memory_storage)
    memory_storage.mtimes.clear()
    assert watcher.poll_once() is False


def test_fetch_failure_is_a_noop(memory_storage):
    watcher = _watcher(memory_storage)

    def broken(*args):
        raise OSError("disk gone")

    memory_storage.get_config_modified_time = broken
    assert watcher.poll_once() is False
    assert watcher.failed_polls == 1
    assert watcher.session.get_setting("ServerSettings", "SessionName") == "My Island"



def test_file_is_read_without_holding_session_lock(memory_storage):
    watcher = _watcher(memory_storage)
    memory_storage.write_external("1", "GameUserSettings", "[ServerSettings]\nXPMultiplier=3.0\n")
    read_config = memory_storage.read_config
    lock_free = []

    def try_lock():
        acquired = watcher.session.lock.acquire(timeout=1)
        if acquired:
            watcher.session.lock.release()
        lock_free.append(acquired)

    def read(*args):
        other = threading.Thread(target=try_lock)
        other.start()
        other.join()
        return read_config(*args)

    memory_storage.read_config = read
    assert watcher.poll_once() is True
    assert lock_free == [True]


def test_save_during_read_cancels_reload(memory_storage):
    watcher = _watcher(memory_storage)
    session = watcher.session
    memory_storage.write_external("1", "GameUserSettings", "[ServerSettings]\nXPMultiplier=3.0\n")
    read_config = memory_storage.read_config

    def read(*args):
        text = read_config(*args)
        session.update_setting("ServerSettings", "XPMultiplier", "6.0")
        memory_storage.save_config("1", "GameUserSettings", session.serialize_for_save())
        session.commit(memory_storage.get_config_modified_time("1", "GameUserSettings"))
        return text

    memory_storage.read_config = read
    assert watcher.poll_once() is False
    assert watcher.reload_count == 0
    assert session.get_setting("ServerSettings", "XPMultiplier") == "6.0"


def test_read_failure_is_not_retried_for_same_mtime(memory_storage):
    watcher = _watcher(memory_storage)
    memory_storage.write_external("1", "GameUserSettings", "[ServerSettings]\nXPMultiplier=3.0\n")

    reads = []

    def broken(*args):
        reads.append(args)
        raise OSError("locked by server")

    memory_storage.read_config = broken
    assert watcher.poll_once() is False
    assert watcher.poll_once() is False
    assert len(reads) == 1
    assert watcher.session.get_setting("ServerSettings", "XPMultiplier") == "1.0"


def test_background_thread_picks_up_change(memory_storage):
    watcher = _watcher(memory_storage)
    watcher.start()
    try:
        assert watcher.state == WatcherState.RUNNING
        memory_storage.write_external("1", "GameUserSettings", "[ServerSettings]\nXPMultiplier=4.0\n")
        deadline = time.time() + 5
        while watcher.reload_count == 0 and time.time() < deadline:
            time.sleep(0.01)
        assert watcher.reload_count == 1
    finally:
        watcher.stop()
    assert not watcher.is_running
    assert watcher.state == WatcherState.STOPPED
