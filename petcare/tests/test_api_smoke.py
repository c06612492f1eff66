import base64

from petcare.logs import search_logs


def _create_user(client, name, email, role):
    r = client.post("/api/users", json={"name": name, "email": email, "password": "pw123456", "role": role})
    assert r.status_code == 201, r.text
    return r.json()["userid"]


def test_health_and_version(client):
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/version").json()["app"] == "petcare-api"


def test_user_endpoints(client):
    uid = _create_user(client, "Alice", "alice@example.com", "Pet Owner")
    r = client.get(f"/api/users/{uid}")
    assert r.status_code == 200
    body = r.json()
    assert body["role"] == "pet owner"
    assert "password" not in body
    assert client.get("/api/users/999").status_code == 404

    r = client.post("/api/users", json={"name": "x", "email": "x@example.com", "password": "pw", "role": "admin"})
    assert r.status_code == 400
    r = client.post("/api/users", json={"name": "x", "email": "alice@example.com", "password": "pw", "role": "manager"})
    assert r.status_code == 409

    assert client.put(f"/api/pet-owners/{uid}", json={"city": "Hue"}).status_code == 200
    assert client.get(f"/api/pet-owners/{uid}").json()["city"] == "Hue"


def test_service_provider_logo(client):
    uid = _create_user(client, "Bob", "bob@example.com", "service provider")
    logo = base64.b64encode(b"png-bytes").decode()
    r = client.put(f"/api/service-providers/{uid}", json={"business_name": "Paws", "logo_b64": logo})
    assert r.status_code == 200
    sp = client.get(f"/api/service-providers/{uid}").json()
    assert sp["business_name"] == "Paws"
    assert sp["has_logo"] is True
    r = client.put(f"/api/service-providers/{uid}", json={"logo_b64": "not base64!"})
    assert r.status_code == 400


def test_ticket_flow(client):
    owner = _create_user(client, "Alice", "alice@example.com", "pet owner")
    mgr = _create_user(client, "Carol", "carol@example.com", "manager")
    tid = client.post("/api/tickets", json={"userid": owner, "subject": "Refund"}).json()["ticketid"]

    r = client.post(f"/api/tickets/{tid}/response", json={"response": "done", "status": "resolved"})
    assert r.status_code == 400

    assert client.post(f"/api/tickets/{tid}/assign", json={"managerid": mgr}).status_code == 200
    assert client.put(f"/api/tickets/{tid}", json={"subject": "late edit"}).status_code == 404
    assert client.post(f"/api/tickets/{tid}/response", json={"response": "done", "status": "resolved"}).status_code == 200

    t = client.get(f"/api/tickets/{tid}").json()
    assert t["status"] == "resolved"
    assert t["response"] == "done"
    assert [x["ticketid"] for x in client.get("/api/tickets", params={"manager_id": mgr}).json()["items"]] == [tid]
    assert client.post("/api/tickets/999/assign", json={"managerid": mgr}).status_code == 404


def test_pet_and_schedule_flow(client):
    owner = _create_user(client, "Alice", "alice@example.com", "pet owner")
    r = client.post("/api/pets", json={"name": "Mochi", "breed": "Shiba", "userid": owner, "dob": "2021-04-01"})
    petid = r.json()["petid"]
    assert client.get(f"/api/pets/{petid}").json()["dob"] == "2021-04-01"
    did = client.post(f"/api/pets/{petid}/diets", json={"name": "Kibble"}).json()["dietid"]

    r = client.post("/api/pet-schedules", json={"hour": 8, "minute": 0, "target_kind": "diet", "target_id": did, "repeat_option": "daily"})
    assert r.status_code == 201
    sid = r.json()["petscheduleid"]
    s = client.get(f"/api/pet-schedules/{sid}").json()
    assert s["target"] == {"kind": "diet", "target_id": did}

    assert client.get("/api/pet-schedules").status_code == 400
    items = client.get("/api/pet-schedules", params={"diet_id": did}).json()["items"]
    assert [x["petscheduleid"] for x in items] == [sid]
    r = client.post("/api/pet-schedules", json={"hour": 25, "minute": 0, "target_kind": "diet", "target_id": did})
    assert r.status_code == 400


def test_booking_flow(client):
    owner = _create_user(client, "Alice", "alice@example.com", "pet owner")
    prov = _create_user(client, "Bob", "bob@example.com", "service provider")
    petid = client.post("/api/pets", json={"name": "Mochi", "breed": "Shiba", "userid": owner}).json()["petid"]
    sid = client.post("/api/services", json={"name": "Walk", "price": 10, "providerid": prov}).json()["serviceid"]
    assert client.post(f"/api/services/{sid}/slots", json={"slot": "09:00:00"}).status_code == 201
    assert client.post(f"/api/services/{sid}/slots", json={"slot": "09:00:00"}).status_code == 409

    r = client.post("/api/bookings", json={"poid": owner, "svid": sid, "slot": "09:00:00", "serve_date": "2024-05-01", "pet_ids": [petid]})
    assert r.status_code == 201, r.text
    bookid = r.json()["bookid"]
    b = client.get(f"/api/bookings/{bookid}").json()
    assert b["pet_ids"] == [petid]
    assert b["slot"] == "09:00:00"
    assert client.get("/api/bookings").status_code == 400

    assert client.post(f"/api/bookings/{bookid}/updates", json={"text": "picked up"}).json()["no_update"] == 1
    assert client.post(f"/api/bookings/{bookid}/updates", json={"text": "walking"}).json()["no_update"] == 2
    assert [u["text"] for u in client.get(f"/api/bookings/{bookid}/updates").json()["items"]] == ["picked up", "walking"]

    assert client.post(f"/api/bookings/{bookid}/review", json={"start": 9}).status_code == 400
    assert client.post(f"/api/bookings/{bookid}/review", json={"start": 5, "comment": "great"}).status_code == 201
    assert client.get(f"/api/bookings/{bookid}/review").json()["start"] == 5
    assert client.get(f"/api/bookings/{bookid}/report").status_code == 404

    assert client.delete(f"/api/services/{sid}/slots/09:00:00").status_code == 409


def test_booking_rejections(client):
    owner = _create_user(client, "Alice", "alice@example.com", "pet owner")
    prov = _create_user(client, "Bob", "bob@example.com", "service provider")
    petid = client.post("/api/pets", json={"name": "Mochi", "breed": "Shiba", "userid": owner}).json()["petid"]
    sid = client.post("/api/services", json={"name": "Walk", "price": 10, "providerid": prov}).json()["serviceid"]
    client.post(f"/api/services/{sid}/slots", json={"slot": "09:00:00"})
    body = {"poid": owner, "svid": sid, "slot": "09:00:00", "serve_date": "2024-05-01"}

    # 宠物不存在：整单回滚
    assert client.post("/api/bookings", json={**body, "pet_ids": [petid, 999]}).status_code == 400
    assert client.get("/api/bookings", params={"owner_id": owner}).json()["items"] == []

    bookid = client.post("/api/bookings", json={**body, "pet_ids": [petid]}).json()["bookid"]
    assert client.post("/api/bookings", json=body).status_code == 409
    assert client.put(f"/api/bookings/{bookid}/status", json={"status": "cancelled"}).status_code == 200
    assert client.post("/api/bookings", json=body).status_code == 201

    assert client.post("/api/bookings/999/updates", json={"text": "x"}).status_code == 404


def test_notifications_and_schedules(client):
    uid = _create_user(client, "Alice", "alice@example.com", "pet owner")
    nid = client.post(f"/api/users/{uid}/notifications", json={"text": "hi"}).json()["notiid"]
    assert client.put(f"/api/notifications/{nid}", json={"text": "hello"}).status_code == 200
    assert [n["text"] for n in client.get(f"/api/users/{uid}/notifications").json()["items"]] == ["hello"]
    assert client.delete(f"/api/users/{uid}/notifications").status_code == 200
    assert client.delete(f"/api/notifications/{nid}").status_code == 404

    r = client.post(f"/api/users/{uid}/schedules", json={"scheduled_time": "2024-06-01T09:30:00", "tittle": "Vet"})
    sid = r.json()["scheduleid"]
    assert client.get(f"/api/schedules/{sid}").json()["scheduled_time"] == "2024-06-01T09:30:00"


def test_operation_log_written(client, db):
    _create_user(client, "Alice", "alice@example.com", "pet owner")
    client.post("/api/users", json={"name": "x", "email": "x@example.com", "password": "pw", "role": "admin"})
    total, items = search_logs(db, None, "CREATE_USER", None, None, 1, 10)
    assert total == 2
    assert {i["result"] for i in items} == {"OK", "ERROR"}
    assert all("pw123456" not in (i["payload_json"] or "") for i in items)
    r = client.get("/api/logs/search", params={"action": "CREATE_USER"})
    assert r.json()["total"] == 2


def test_diet_activity_update(client):
    owner = _create_user(client, "Alice", "alice@example.com", "pet owner")
    petid = client.post("/api/pets", json={"name": "Mochi", "breed": "Shiba", "userid": owner}).json()["petid"]
    did = client.post(f"/api/pets/{petid}/diets", json={"name": "Kibble", "amount": "100g"}).json()["dietid"]
    assert client.put(f"/api/diets/{did}", json={"name": "Kibble", "amount": "150g"}).status_code == 200
    d = client.get(f"/api/diets/{did}").json()
    assert d["amount"] == "150g" and d["petid"] == petid
    aid = client.post(f"/api/pets/{petid}/activities", json={"name": "Walk"}).json()["activityid"]
    assert client.put(f"/api/activities/{aid}", json={"name": "Run"}).status_code == 200
    assert client.get(f"/api/activities/{aid}").json()["name"] == "Run"
    assert client.put("/api/diets/999", json={"name": "x"}).status_code == 404


def test_operation_log_entity_filter(client, db):
    uid = _create_user(client, "Alice", "alice@example.com", "pet owner")
    client.put(f"/api/pet-owners/{uid}", json={"city": "Hue"})
    total, items = search_logs(db, "Hue", None, None, None, 1, 10, entity_type="PET_OWNER", entity_id=str(uid))
    assert total == 1
    assert items[0]["action"] == "UPDATE_PET_OWNER"
    r = client.get("/api/logs/search", params={"entity_type": "USER", "size": 1000})
    assert r.json()["total"] == 1
    assert len(r.json()["items"]) == 1
