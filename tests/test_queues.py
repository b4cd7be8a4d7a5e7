import pytest

from cpusched.errors import EmptyQueueError
from cpusched.models import Process
from cpusched.queues import ArrivalPool, FifoReadyQueue, Job, PriorityReadyQueue


def _job(pid, burst, priority=0, arrival=0):
    return Job(Process(pid, arrival=arrival, burst=burst, priority=priority))


def test_priority_queue_orders_by_remaining_then_priority():
    q = PriorityReadyQueue()
    for job in [_job(1, 5, 0), _job(2, 3, 1), _job(3, 3, 4), _job(4, 1, 0)]:
        q.enqueue(job)

    assert len(q) == 4
    assert [q.dequeue().pid for _ in range(4)] == [4, 3, 2, 1]
    assert not q


def test_priority_queue_uses_remaining_not_original_burst():
    q = PriorityReadyQueue()
    long_job = _job(1, 10)
    long_job.run(9)
    q.enqueue(long_job)
    q.enqueue(_job(2, 2))
    assert q.peek().pid == 1


def test_priority_queue_equal_keys_do_not_compare_jobs():
    q = PriorityReadyQueue()
    q.enqueue(_job(1, 2))
    q.enqueue(_job(2, 2))
    assert {q.dequeue().pid, q.dequeue().pid} == {1, 2}


def test_fifo_queue_keeps_insertion_order():
    q = FifoReadyQueue()
    for pid in (3, 1, 2):
        q.enqueue(_job(pid, 1))
    assert q.peek().pid == 3
    assert [q.dequeue().pid for _ in range(3)] == [3, 1, 2]


@pytest.mark.parametrize("queue_cls", [PriorityReadyQueue, FifoReadyQueue])
def test_dequeue_empty_raises(queue_cls):
    q = queue_cls()
    assert q.peek() is None
    with pytest.raises(EmptyQueueError):
        q.dequeue()


def test_arrival_pool_admits_up_to_time():
    pool = ArrivalPool(
        [
            Process(1, arrival=4, burst=1),
            Process(2, arrival=0, burst=1),
            Process(3, arrival=2, burst=1),
        ]
    )
    q = FifoReadyQueue()

    assert pool.next_arrival == 0
    assert pool.admit(q, 2) == 2
    assert [job.pid for job in q._items] == [2, 3]
    assert pool.admit(q, 3) == 0
    assert pool.next_arrival == 4
    assert pool.admit(q, 10) == 1
    assert not pool
    assert pool.next_arrival is None


def test_arrival_pool_keeps_input_order_on_ties():
    pool = ArrivalPool([Process(5, arrival=1, burst=1), Process(2, arrival=1, burst=1)])
    q = FifoReadyQueue()
    pool.admit(q, 1)
    assert [q.dequeue().pid, q.dequeue().pid] == [5, 2]


def test_job_is_a_working_copy():
    process = Process(1, arrival=0, burst=3)
    job = Job(process)
    assert job.run(5) == 3
    assert job.done
    assert process.burst == 3
