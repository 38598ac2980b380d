"""Console demonstration of the singleton driver registry, no browser needed."""

from __future__ import annotations

import threading

from pattern_framework.driver.driver_registry import get_registry
from pattern_framework.utils.logger import get_logger, log_section

log = get_logger()


def _concurrent_instances(workers: int) -> list:
    instances = [None] * workers
    barrier = threading.Barrier(workers)

    def worker(index: int) -> None:
        barrier.wait()
        instances[index] = get_registry()
        log.info("   Thread %d got instance: %s", index + 1, hex(id(instances[index])))

    threads = [
        threading.Thread(target=worker, args=(i,), name=f"demo-worker-{i + 1}")
        for i in range(workers)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    return instances


def run_demo(workers: int = 10) -> bool:
    """
    中文：演示单例行为：重复获取与多线程并发获取均返回同一实例。
    参数:
        workers: 并发线程数。
    """

    log_section("Singleton Pattern Demonstration")

    log.info("1. Testing Basic Singleton Instance Creation:")
    first = get_registry()
    log.info("   Instance id: %s", hex(id(first)))

    log.info("2. Testing Singleton Behavior (Same Instance):")
    second = get_registry()
    same_instance = first is second
    log.info("   Same instance? %s", same_instance)

    log.info("3. Testing Thread Safety:")
    instances = _concurrent_instances(workers)
    thread_safe = all(instance is first for instance in instances)
    log.info("   All threads got same instance? %s", thread_safe)

    log.info("4. Testing Multiple get_registry Calls:")
    consistent = True
    for i in range(5):
        instance = get_registry()
        log.info("   Call %d - id: %s", i + 1, hex(id(instance)))
        consistent = consistent and instance is first

    results = {
        "Same instance verification": same_instance,
        "Thread safety": thread_safe,
        "Multiple calls consistency": consistent,
    }
    log_section("Singleton Pattern Test Results")
    for name, ok in results.items():
        log.info("%s: %s", name, "PASSED" if ok else "FAILED")
    return all(results.values())


def main() -> int:
    return 0 if run_demo() else 1


if __name__ == "__main__":
    raise SystemExit(main())
