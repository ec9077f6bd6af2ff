"""Database schema initialization for the hospital database."""

from __future__ import annotations


INIT_SCHEMA = """
-- Organisation
CREATE TABLE IF NOT EXISTS hospitals (
    hospital_id INTEGER PRIMARY KEY AUTOINCREMENT,
    hospital_name TEXT NOT NULL,
    hospital_code TEXT UNIQUE
);

CREATE TABLE IF NOT EXISTS departments (
    department_id INTEGER PRIMARY KEY AUTOINCREMENT,
    hospital_id INTEGER NOT NULL REFERENCES hospitals(hospital_id),
    department_name TEXT NOT NULL,
    department_code TEXT
);

CREATE TABLE IF NOT EXISTS rooms (
    room_id INTEGER PRIMARY KEY AUTOINCREMENT,
    hospital_id INTEGER NOT NULL REFERENCES hospitals(hospital_id),
    department_id INTEGER NOT NULL REFERENCES departments(department_id),
    room_number TEXT NOT NULL,
    room_type TEXT
);

CREATE TABLE IF NOT EXISTS beds (
    bed_id INTEGER PRIMARY KEY AUTOINCREMENT,
    hospital_id INTEGER NOT NULL REFERENCES hospitals(hospital_id),
    room_id INTEGER NOT NULL REFERENCES rooms(room_id),
    bed_number TEXT NOT NULL,
    bed_type TEXT,
    bed_status TEXT NOT NULL DEFAULT 'AVAILABLE'
        CHECK (bed_status IN ('AVAILABLE', 'OCCUPIED', 'MAINTENANCE', 'RESERVED')),
    current_patient_id INTEGER REFERENCES patients(patient_id),
    occupied_date TIMESTAMP
);

CREATE TABLE IF NOT EXISTS staff_members (
    staff_id INTEGER PRIMARY KEY AUTOINCREMENT,
    hospital_id INTEGER NOT NULL REFERENCES hospitals(hospital_id),
    first_name TEXT NOT NULL,
    last_name TEXT NOT NULL,
    staff_role TEXT
);

CREATE TABLE IF NOT EXISTS patients (
    patient_id INTEGER PRIMARY KEY AUTOINCREMENT,
    hospital_id INTEGER REFERENCES hospitals(hospital_id),
    patient_number TEXT NOT NULL UNIQUE,
    first_name TEXT NOT NULL,
    last_name TEXT NOT NULL,
    date_of_birth DATE,
    gender TEXT
);

-- Admission / discharge / transfer
CREATE TABLE IF NOT EXISTS patient_admissions (
    admission_id INTEGER PRIMARY KEY AUTOINCREMENT,
    patient_id INTEGER NOT NULL REFERENCES patients(patient_id),
    hospital_id INTEGER NOT NULL REFERENCES hospitals(hospital_id),
    admission_number TEXT UNIQUE,
    admission_date TIMESTAMP NOT NULL,
    admission_type TEXT NOT NULL,
    department_id INTEGER NOT NULL REFERENCES departments(department_id),
    attending_doctor INTEGER REFERENCES staff_members(staff_id),
    room_id INTEGER REFERENCES rooms(room_id),
    bed_id INTEGER REFERENCES beds(bed_id),
    admission_source TEXT,
    admission_status TEXT NOT NULL DEFAULT 'ADMITTED',
    discharge_date TIMESTAMP,
    discharge_disposition TEXT,
    discharge_summary TEXT
);

CREATE TABLE IF NOT EXISTS medical_records (
    record_id INTEGER PRIMARY KEY AUTOINCREMENT,
    patient_id INTEGER NOT NULL REFERENCES patients(patient_id),
    hospital_id INTEGER REFERENCES hospitals(hospital_id),
    admission_id INTEGER REFERENCES patient_admissions(admission_id),
    doctor_id INTEGER REFERENCES staff_members(staff_id),
    record_date TIMESTAMP NOT NULL,
    record_type TEXT NOT NULL,
    chief_complaint TEXT,
    diagnosis TEXT,
    treatment_plan TEXT,
    notes TEXT
);

CREATE TABLE IF NOT EXISTS discharge_planning (
    plan_id INTEGER PRIMARY KEY AUTOINCREMENT,
    admission_id INTEGER NOT NULL UNIQUE REFERENCES patient_admissions(admission_id),
    patient_id INTEGER NOT NULL REFERENCES patients(patient_id),
    hospital_id INTEGER REFERENCES hospitals(hospital_id),
    discharge_instructions TEXT,
    medication_education TEXT,
    diet_instructions TEXT,
    follow_up_appointments TEXT,
    discharge_destination TEXT,
    plan_status TEXT NOT NULL DEFAULT 'IN_PROGRESS'
);

-- Vital signs
CREATE TABLE IF NOT EXISTS vital_signs (
    vital_id INTEGER PRIMARY KEY AUTOINCREMENT,
    patient_id INTEGER NOT NULL REFERENCES patients(patient_id),
    hospital_id INTEGER NOT NULL REFERENCES hospitals(hospital_id),
    admission_id INTEGER REFERENCES patient_admissions(admission_id),
    recorded_by INTEGER NOT NULL REFERENCES staff_members(staff_id),
    recording_date TIMESTAMP NOT NULL,
    blood_pressure_systolic REAL,
    blood_pressure_diastolic REAL,
    heart_rate REAL,
    respiratory_rate REAL,
    temperature REAL,
    oxygen_saturation REAL,
    weight REAL,
    height REAL,
    bmi REAL,
    pain_score INTEGER CHECK (pain_score IS NULL OR pain_score BETWEEN 0 AND 10),
    notes TEXT
);

-- Pharmacy and laboratory
CREATE TABLE IF NOT EXISTS medications (
    medication_id INTEGER PRIMARY KEY AUTOINCREMENT,
    medication_name TEXT NOT NULL,
    cost_price REAL NOT NULL DEFAULT 0
);

CREATE TABLE IF NOT EXISTS prescriptions (
    prescription_id INTEGER PRIMARY KEY AUTOINCREMENT,
    admission_id INTEGER NOT NULL REFERENCES patient_admissions(admission_id),
    medication_id INTEGER NOT NULL REFERENCES medications(medication_id),
    dispensed_quantity REAL NOT NULL DEFAULT 0,
    dispensed_date TIMESTAMP
);

CREATE TABLE IF NOT EXISTS lab_tests (
    test_id INTEGER PRIMARY KEY AUTOINCREMENT,
    test_name TEXT NOT NULL,
    test_cost REAL NOT NULL DEFAULT 0
);

CREATE TABLE IF NOT EXISTS lab_orders (
    order_id INTEGER PRIMARY KEY AUTOINCREMENT,
    admission_id INTEGER NOT NULL REFERENCES patient_admissions(admission_id),
    test_id INTEGER NOT NULL REFERENCES lab_tests(test_id),
    order_date TIMESTAMP NOT NULL
);

-- Billing
CREATE TABLE IF NOT EXISTS billing (
    bill_id INTEGER PRIMARY KEY AUTOINCREMENT,
    hospital_id INTEGER NOT NULL REFERENCES hospitals(hospital_id),
    patient_id INTEGER NOT NULL REFERENCES patients(patient_id),
    admission_id INTEGER REFERENCES patient_admissions(admission_id),
    bill_number TEXT UNIQUE,
    bill_date DATE NOT NULL,
    due_date DATE,
    total_amount REAL NOT NULL DEFAULT 0,
    insurance_amount REAL NOT NULL DEFAULT 0,
    patient_amount REAL NOT NULL DEFAULT 0,
    paid_amount REAL NOT NULL DEFAULT 0,
    billing_status TEXT NOT NULL DEFAULT 'PENDING'
);

CREATE TABLE IF NOT EXISTS billing_items (
    item_id INTEGER PRIMARY KEY AUTOINCREMENT,
    bill_id INTEGER NOT NULL REFERENCES billing(bill_id),
    item_type TEXT NOT NULL,
    item_description TEXT NOT NULL,
    quantity REAL NOT NULL DEFAULT 1,
    unit_price REAL NOT NULL DEFAULT 0,
    service_date DATE
);

CREATE TABLE IF NOT EXISTS payments (
    payment_id INTEGER PRIMARY KEY AUTOINCREMENT,
    bill_id INTEGER NOT NULL REFERENCES billing(bill_id),
    hospital_id INTEGER NOT NULL REFERENCES hospitals(hospital_id),
    patient_id INTEGER NOT NULL REFERENCES patients(patient_id),
    payment_date TIMESTAMP NOT NULL,
    payment_amount REAL NOT NULL,
    payment_method TEXT NOT NULL,
    reference_number TEXT,
    received_by INTEGER REFERENCES staff_members(staff_id),
    payment_status TEXT NOT NULL DEFAULT 'COMPLETED'
);

CREATE TABLE IF NOT EXISTS insurance_providers (
    insurance_id INTEGER PRIMARY KEY AUTOINCREMENT,
    provider_name TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS insurance_claim_details (
    claim_detail_id INTEGER PRIMARY KEY AUTOINCREMENT,
    bill_id INTEGER NOT NULL REFERENCES billing(bill_id),
    insurance_id INTEGER NOT NULL REFERENCES insurance_providers(insurance_id),
    hospital_id INTEGER NOT NULL REFERENCES hospitals(hospital_id),
    claim_number TEXT UNIQUE,
    claim_date DATE NOT NULL,
    claim_amount REAL NOT NULL,
    authorization_number TEXT,
    claim_status TEXT NOT NULL DEFAULT 'SUBMITTED',
    submission_date DATE
);

-- Emergency department
CREATE TABLE IF NOT EXISTS emergency_triage (
    triage_id INTEGER PRIMARY KEY AUTOINCREMENT,
    patient_id INTEGER NOT NULL REFERENCES patients(patient_id),
    hospital_id INTEGER NOT NULL REFERENCES hospitals(hospital_id),
    arrival_date TIMESTAMP NOT NULL,
    arrival_method TEXT,
    chief_complaint TEXT NOT NULL,
    triage_level TEXT NOT NULL,
    triage_nurse INTEGER REFERENCES staff_members(staff_id),
    pain_score INTEGER CHECK (pain_score IS NULL OR pain_score BETWEEN 0 AND 10),
    triage_start_time TIMESTAMP,
    triage_end_time TIMESTAMP,
    assigned_to_doctor INTEGER REFERENCES staff_members(staff_id),
    status TEXT NOT NULL DEFAULT 'WAITING',
    disposition TEXT
);

-- Indexes
CREATE INDEX IF NOT EXISTS idx_beds_hospital_status ON beds(hospital_id, bed_status);
CREATE INDEX IF NOT EXISTS idx_admissions_hospital_status ON patient_admissions(hospital_id, admission_status);
CREATE INDEX IF NOT EXISTS idx_medical_records_admission ON medical_records(admission_id);
CREATE INDEX IF NOT EXISTS idx_vital_signs_patient_date ON vital_signs(patient_id, recording_date);
CREATE INDEX IF NOT EXISTS idx_billing_items_bill ON billing_items(bill_id);
CREATE INDEX IF NOT EXISTS idx_payments_bill ON payments(bill_id);
CREATE INDEX IF NOT EXISTS idx_billing_patient ON billing(patient_id, hospital_id);
CREATE INDEX IF NOT EXISTS idx_triage_hospital_status ON emergency_triage(hospital_id, status);

-- Emergency tracking board
CREATE VIEW IF NOT EXISTS v_emergency_triage_board AS
SELECT et.triage_id,
       et.hospital_id,
       p.patient_number,
       p.first_name || ' ' || p.last_name AS patient_name,
       et.triage_level,
       et.chief_complaint,
       et.arrival_date,
       et.status,
       sm.first_name || ' ' || sm.last_name AS assigned_doctor,
       CASE et.triage_level
           WHEN 'RESUSCITATION' THEN 1
           WHEN 'EMERGENT' THEN 2
           WHEN 'URGENT' THEN 3
           WHEN 'LESS_URGENT' THEN 4
           WHEN 'NON_URGENT' THEN 5
           ELSE 6
       END AS priority
FROM emergency_triage et
JOIN patients p ON et.patient_id = p.patient_id
LEFT JOIN staff_members sm ON et.assigned_to_doctor = sm.staff_id
WHERE et.status IN ('WAITING', 'IN_PROGRESS');

-- Bill status follows completed payments
CREATE TRIGGER IF NOT EXISTS trg_payment_update_billing AFTER INSERT ON payments BEGIN
    UPDATE billing
    SET paid_amount = (
            SELECT COALESCE(SUM(payment_amount), 0) FROM payments
            WHERE bill_id = NEW.bill_id AND payment_status = 'COMPLETED'
        ),
        billing_status = CASE
            WHEN (SELECT COALESCE(SUM(payment_amount), 0) FROM payments
                  WHERE bill_id = NEW.bill_id AND payment_status = 'COMPLETED') >= patient_amount
                THEN 'PAID'
            WHEN (SELECT COALESCE(SUM(payment_amount), 0) FROM payments
                  WHERE bill_id = NEW.bill_id AND payment_status = 'COMPLETED') > 0
                THEN 'PARTIAL'
            ELSE billing_status
        END
    WHERE bill_id = NEW.bill_id AND billing_status != 'CANCELLED';
END;
"""
