import threading

from wordcrawl.domain.visited_tracker import VisitedTracker


def test_url_not_visited_initially():
    tracker = VisitedTracker()
    assert not tracker.is_visited("https://example.com")
    assert len(tracker) == 0


def test_claiming_url_makes_it_visited():
    tracker = VisitedTracker()
    assert tracker.claim("https://example.com")
    assert tracker.is_visited("https://example.com")


def test_different_urls_tracked_independently():
    tracker = VisitedTracker()
    tracker.claim("https://example.com")
    assert tracker.is_visited("https://example.com")
    assert not tracker.is_visited("https://other.com")


def test_second_claim_loses():
    tracker = VisitedTracker()
    assert tracker.claim("https://example.com")
    assert not tracker.claim("https://example.com")
    assert len(tracker) == 1


def test_concurrent_claims_have_exactly_one_winner():
    tracker = VisitedTracker()
    threads_count = 16
    barrier = threading.Barrier(threads_count)
    wins = []
    wins_lock = threading.Lock()

    def claim():
        barrier.wait()
        won = tracker.claim("https://example.com/contested")
        with wins_lock:
            wins.append(won)

    threads = [threading.Thread(target=claim) for _ in range(threads_count)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert wins.count(True) == 1
    assert len(tracker) == 1
